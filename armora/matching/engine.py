"""Matching engine — the orchestrator for the officer matching pipeline.

:class:`MatchingEngine` runs each candidate through eligibility → scoring →
estimates, then delegates to :class:`OfficerRanker` for the final ordering.
The engine holds no per-request state; :func:`match` is a module-level
shortcut over a fresh engine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from armora.matching.eligibility import EligibilityFilter
from armora.matching.estimates import estimate_price, estimate_response_time
from armora.matching.models import MatchRequest, MatchResult, OfficerProfile
from armora.matching.ranker import OfficerRanker
from armora.matching.scoring import OfficerScorer

logger = logging.getLogger("armora.matching.engine")


class MatchingEngine:
    """Orchestrates officer matching for a protection request.

    Usage::

        engine = MatchingEngine()
        results = engine.match(request, officers)
    """

    def __init__(self) -> None:
        self.eligibility_filter = EligibilityFilter()
        self.scorer = OfficerScorer()
        self.ranker = OfficerRanker()

    def match(
        self,
        criteria: MatchRequest,
        candidates: Iterable[OfficerProfile],
    ) -> list[MatchResult]:
        """Score and rank every eligible candidate for the request.

        Parameters
        ----------
        criteria:
            The principal's request.
        candidates:
            Officer snapshot from the directory.

        Returns
        -------
        list[MatchResult]
            Eligible officers sorted descending by ``match_score``.
        """
        results: list[MatchResult] = []
        evaluated = 0

        for officer in candidates:
            evaluated += 1
            eligibility = self.eligibility_filter.check_eligibility(officer, criteria)
            if not eligibility.eligible:
                continue

            distance = eligibility.distance_km
            score = self.scorer.score_officer(officer, criteria, distance)

            results.append(
                MatchResult(
                    officer=officer,
                    match_score=score.match_score,
                    match_reasons=score.reasons,
                    proximity_km=round(distance, 2),
                    estimated_response_time=estimate_response_time(
                        officer, distance, criteria.urgency
                    ),
                    price_estimate=estimate_price(officer, criteria),
                    components=score.components,
                )
            )

        ranked = self.ranker.rank_matches(results)
        logger.info(
            "Matching complete: %d eligible of %d officers (urgency=%s threat=%s)",
            len(ranked),
            evaluated,
            criteria.urgency.value,
            criteria.threat_level.value,
        )
        return ranked


def match(criteria: MatchRequest, candidates: Iterable[OfficerProfile]) -> list[MatchResult]:
    """Rank ``candidates`` for ``criteria``; see :meth:`MatchingEngine.match`."""
    return MatchingEngine().match(criteria, candidates)
