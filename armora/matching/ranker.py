"""Officer ranker — orders scored matches for presentation.

Matches are sorted descending by ``match_score``.  The sort is stable, so
officers with equal scores keep the order in which they were supplied by
the directory.
"""

from __future__ import annotations

import logging

from armora.matching.models import MatchResult

logger = logging.getLogger("armora.matching.ranker")


class OfficerRanker:
    """Ranks match results by score.

    The ranker is stateless — call :meth:`rank_matches` with every match for
    a request and receive a new sorted list back.
    """

    def rank_matches(self, matches: list[MatchResult]) -> list[MatchResult]:
        """Sort matches descending by score, preserving input order on ties.

        Parameters
        ----------
        matches:
            Unordered list of :class:`MatchResult` instances.

        Returns
        -------
        list[MatchResult]
        """
        if not matches:
            return []

        ranked = sorted(matches, key=lambda m: -m.match_score)

        for rank, match in enumerate(ranked, start=1):
            logger.debug(
                "Ranked officer=%s rank=%d score=%.2f distance=%.2fkm",
                match.officer.id,
                rank,
                match.match_score,
                match.proximity_km,
            )
        return ranked
