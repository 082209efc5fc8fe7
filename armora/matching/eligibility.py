"""Eligibility filter — decides whether an officer may be scored for a
request at all.

Officers must be active and verified.  For ``immediate`` requests an officer
more than :data:`IMMEDIATE_MAX_DISTANCE_KM` away is excluded; other urgency
levels apply no distance cut-off, so distant officers are scored (poorly)
rather than dropped.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from armora.matching.geo import distance_between
from armora.matching.models import MatchRequest, OfficerProfile, Urgency

logger = logging.getLogger("armora.matching.eligibility")

IMMEDIATE_MAX_DISTANCE_KM = 100.0


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class EligibilityResult(BaseModel):
    """Result of the eligibility check for one officer.

    Attributes
    ----------
    eligible:
        ``True`` when the officer should be scored.
    distance_km:
        Unrounded distance from the principal, reused by the scorer.
    failed_checks:
        Human-readable descriptions of each check that failed.
    """

    eligible: bool
    distance_km: float
    failed_checks: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# EligibilityFilter
# ---------------------------------------------------------------------------


class EligibilityFilter:
    """Stateless eligibility gate applied before scoring."""

    def check_eligibility(
        self, officer: OfficerProfile, criteria: MatchRequest
    ) -> EligibilityResult:
        """Check one officer against the request.

        Parameters
        ----------
        officer:
            Candidate officer.
        criteria:
            The principal's request.

        Returns
        -------
        EligibilityResult
        """
        failed: list[str] = []
        if not officer.is_active:
            failed.append("Officer is not active")
        if not officer.is_verified:
            failed.append("Officer is not verified")

        distance = distance_between(criteria.principal_location, officer.current_location)
        if criteria.urgency == Urgency.IMMEDIATE and distance > IMMEDIATE_MAX_DISTANCE_KM:
            failed.append(
                f"{distance:.1f}km exceeds {IMMEDIATE_MAX_DISTANCE_KM:.0f}km limit "
                "for immediate requests"
            )

        if failed:
            logger.debug("Officer %s ineligible: %s", officer.id, "; ".join(failed))

        return EligibilityResult(
            eligible=not failed,
            distance_km=distance,
            failed_checks=failed,
        )
