"""Officer scorer — synthesises a 0-100 match score for an officer against a
protection request from four weighted sub-scores plus additive bonus points.

    core  = (proximity × 40 + specialization × 30
             + experience × 20 + availability × 10) / 100
    score = min(100, core + bonus)

Every sub-score is normalised to 0-100 before weighting.  Bonus points are
not normalised and are applied after the weighted average.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from armora.matching.models import (
    AvailabilityStatus,
    MatchRequest,
    OfficerProfile,
    SpecializationType,
    ThreatLevel,
    Urgency,
)

logger = logging.getLogger("armora.matching.scoring")

MAX_REASONS = 3


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class SpecializationScore(BaseModel):
    score: float = Field(..., ge=0.0, le=100.0)
    matches: list[SpecializationType] = Field(default_factory=list)


class BonusResult(BaseModel):
    total: float = 0.0
    reasons: list[str] = Field(default_factory=list)


class OfficerScore(BaseModel):
    """Scoring result for one officer.

    Attributes
    ----------
    match_score:
        Final capped score rounded to 2 decimal places.
    core_score:
        Weighted average of the four sub-scores.
    components:
        Individual sub-scores: proximity, specialization, experience,
        availability, plus the bonus total.
    reasons:
        Up to :data:`MAX_REASONS` human-readable reasons.
    """

    match_score: float = Field(..., ge=0.0, le=100.0)
    core_score: float
    components: dict[str, Any] = Field(default_factory=dict)
    reasons: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# OfficerScorer
# ---------------------------------------------------------------------------


class OfficerScorer:
    """Scores an eligible officer for a request.

    The scorer is stateless; all tables are class constants.
    """

    # Component weights; must sum to 100
    _WEIGHTS = {
        "proximity": 40.0,
        "specialization": 30.0,
        "experience": 20.0,
        "availability": 10.0,
    }

    _BONUS = {
        "military_background": 5.0,
        "police_background": 3.0,
        "security_clearance": 4.0,
        "vehicle_available": 3.0,
        "language_match": 2.0,
        "high_rating": 3.0,
        "fast_response": 2.0,
    }

    # (max distance km, score), checked in order
    _PROXIMITY_STEPS = (
        (5.0, 100.0),
        (10.0, 90.0),
        (25.0, 70.0),
        (50.0, 50.0),
        (100.0, 25.0),
    )
    _PROXIMITY_FLOOR = 10.0

    _REQUIRED_YEARS: dict[ThreatLevel, float] = {
        ThreatLevel.LOW: 2.0,
        ThreatLevel.MEDIUM: 5.0,
        ThreatLevel.HIGH: 10.0,
        ThreatLevel.EXTREME: 15.0,
    }

    # (multiple of required years, score), checked in order
    _EXPERIENCE_STEPS = (
        (2.0, 100.0),
        (1.5, 90.0),
        (1.0, 80.0),
        (0.8, 60.0),
        (0.6, 40.0),
    )
    _EXPERIENCE_FLOOR = 20.0

    _AVAILABILITY_TABLE: dict[Urgency, dict[AvailabilityStatus, float]] = {
        Urgency.IMMEDIATE: {
            AvailabilityStatus.AVAILABLE_NOW: 100.0,
            AvailabilityStatus.AVAILABLE_SOON: 60.0,
            AvailabilityStatus.ON_ASSIGNMENT: 10.0,
            AvailabilityStatus.OFF_DUTY: 5.0,
            AvailabilityStatus.EMERGENCY_ONLY: 80.0,
        },
        Urgency.WITHIN_HOUR: {
            AvailabilityStatus.AVAILABLE_NOW: 100.0,
            AvailabilityStatus.AVAILABLE_SOON: 90.0,
            AvailabilityStatus.ON_ASSIGNMENT: 20.0,
            AvailabilityStatus.OFF_DUTY: 15.0,
            AvailabilityStatus.EMERGENCY_ONLY: 70.0,
        },
        Urgency.WITHIN_DAY: {
            AvailabilityStatus.AVAILABLE_NOW: 100.0,
            AvailabilityStatus.AVAILABLE_SOON: 95.0,
            AvailabilityStatus.ON_ASSIGNMENT: 50.0,
            AvailabilityStatus.OFF_DUTY: 40.0,
            AvailabilityStatus.EMERGENCY_ONLY: 60.0,
        },
        Urgency.SCHEDULED: {
            AvailabilityStatus.AVAILABLE_NOW: 100.0,
            AvailabilityStatus.AVAILABLE_SOON: 100.0,
            AvailabilityStatus.ON_ASSIGNMENT: 80.0,
            AvailabilityStatus.OFF_DUTY: 70.0,
            AvailabilityStatus.EMERGENCY_ONLY: 50.0,
        },
    }

    # (max response minutes, adjustment), checked in order
    _RESPONSE_ADJUSTMENTS = (
        (15.0, 5.0),
        (30.0, 3.0),
        (60.0, 0.0),
        (120.0, -3.0),
    )
    _RESPONSE_ADJUSTMENT_FLOOR = -5.0

    _HIGH_RATING = 4.8
    _FAST_RESPONSE_MINUTES = 15.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score_officer(
        self,
        officer: OfficerProfile,
        criteria: MatchRequest,
        distance_km: float,
    ) -> OfficerScore:
        """Compute the full score for an eligible officer.

        Parameters
        ----------
        officer:
            The officer being scored.
        criteria:
            The principal's request.
        distance_km:
            Distance already computed by the eligibility filter.

        Returns
        -------
        OfficerScore
        """
        proximity = self.score_proximity(distance_km)
        specialization = self.score_specialization(
            officer.specialization_types(), criteria.required_specializations
        )
        experience = self.score_experience(officer.years_of_experience, criteria.threat_level)
        availability = self.score_availability(
            officer.availability.status, criteria.urgency, officer.average_response_time
        )

        core = (
            proximity * self._WEIGHTS["proximity"]
            + specialization.score * self._WEIGHTS["specialization"]
            + experience * self._WEIGHTS["experience"]
            + availability * self._WEIGHTS["availability"]
        ) / 100.0

        bonus = self.calculate_bonus(officer, criteria)
        match_score = round(min(100.0, core + bonus.total), 2)

        reasons: list[str] = []
        if proximity >= 90:
            reasons.append(f"Only {distance_km:.1f}km away")
        if specialization.matches:
            names = ", ".join(s.value for s in specialization.matches)
            reasons.append(f"Specialized in {names.replace('_', ' ')}")
        if experience >= 90:
            reasons.append(f"Highly experienced ({_format_years(officer.years_of_experience)} years)")
        if availability >= 90:
            reasons.append("Available immediately")
        if officer.rating >= self._HIGH_RATING:
            reasons.append("Top-rated officer")
        reasons.extend(bonus.reasons)

        return OfficerScore(
            match_score=match_score,
            core_score=core,
            components={
                "proximity": proximity,
                "specialization": specialization.score,
                "experience": experience,
                "availability": availability,
                "bonus": bonus.total,
            },
            reasons=reasons[:MAX_REASONS],
        )

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def score_proximity(self, distance_km: float) -> float:
        for max_km, score in self._PROXIMITY_STEPS:
            if distance_km <= max_km:
                return score
        return self._PROXIMITY_FLOOR

    def score_specialization(
        self,
        officer_specializations: list[SpecializationType],
        required: list[SpecializationType],
    ) -> SpecializationScore:
        """Score specialization coverage.

        With no requirements the score is a flat 100.  Otherwise the
        percentage of required specializations held is topped up by 2 points
        per extra specialization (capped at 10) and capped at 100.
        """
        if not required:
            return SpecializationScore(score=100.0)

        held = set(officer_specializations)
        matches = [s for s in required if s in held]
        match_pct = len(matches) / len(required) * 100.0

        wanted = set(required)
        extra = sum(1 for s in officer_specializations if s not in wanted)
        bonus = min(extra * 2.0, 10.0)

        return SpecializationScore(score=min(match_pct + bonus, 100.0), matches=matches)

    def score_experience(self, years: float, threat_level: ThreatLevel) -> float:
        required = self._REQUIRED_YEARS[threat_level]
        for multiple, score in self._EXPERIENCE_STEPS:
            if years >= required * multiple:
                return score
        return self._EXPERIENCE_FLOOR

    def score_availability(
        self,
        status: AvailabilityStatus,
        urgency: Urgency,
        response_minutes: float,
    ) -> float:
        base = self._AVAILABILITY_TABLE[urgency][status]

        adjustment = self._RESPONSE_ADJUSTMENT_FLOOR
        for max_minutes, delta in self._RESPONSE_ADJUSTMENTS:
            if response_minutes <= max_minutes:
                adjustment = delta
                break

        return max(0.0, min(100.0, base + adjustment))

    # ------------------------------------------------------------------
    # Bonus points
    # ------------------------------------------------------------------

    def calculate_bonus(self, officer: OfficerProfile, criteria: MatchRequest) -> BonusResult:
        """Sum additive bonus points for background, equipment and reputation."""
        total = 0.0
        reasons: list[str] = []

        military = officer.military_background
        if military.has_military_service:
            total += self._BONUS["military_background"]
            reasons.append("Military Service")
            if military.security_clearance is not None:
                total += self._BONUS["security_clearance"]
                reasons.append("Security Clearance")

        if officer.police_background.has_police_service:
            total += self._BONUS["police_background"]
            reasons.append("Police Service")

        if criteria.vehicle_required and officer.vehicle is not None:
            total += self._BONUS["vehicle_available"]
            reasons.append("Vehicle Available")

        if criteria.language_preferences:
            spoken = [lang for lang in criteria.language_preferences if lang in officer.languages]
            if spoken:
                total += self._BONUS["language_match"] * len(spoken)
                reasons.append(f"Speaks {', '.join(spoken)}")

        if officer.rating >= self._HIGH_RATING:
            total += self._BONUS["high_rating"]
            reasons.append("Excellent Rating")

        if officer.average_response_time <= self._FAST_RESPONSE_MINUTES:
            total += self._BONUS["fast_response"]
            reasons.append("Fast Response")

        return BonusResult(total=total, reasons=reasons)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _format_years(years: float) -> str:
    """Render whole years without a trailing ``.0``."""
    return str(int(years)) if float(years).is_integer() else str(years)
