"""Armora matching package — officer-to-principal matching.

Exports the public API for officer matching:

- :func:`match` / :class:`MatchingEngine` — score and rank officers for a request
- :class:`EligibilityFilter` — active/verified and immediate-distance gate
- :class:`OfficerScorer` — weighted sub-scores plus bonus points
- :class:`OfficerRanker` — stable descending sort by match score
- :func:`find_by_specialization`, :func:`recommended_officers`,
  :func:`available_now` — unscored roster queries
"""

from armora.matching.eligibility import EligibilityFilter
from armora.matching.scoring import OfficerScorer
from armora.matching.ranker import OfficerRanker
from armora.matching.engine import MatchingEngine, match
from armora.matching.queries import available_now, find_by_specialization, recommended_officers

__all__ = [
    "MatchingEngine",
    "match",
    "EligibilityFilter",
    "OfficerScorer",
    "OfficerRanker",
    "find_by_specialization",
    "recommended_officers",
    "available_now",
]
