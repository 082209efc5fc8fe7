"""Price and response-time estimates attached to each match.

    price    = hourly_rate[budget] × max(duration, minimum_engagement)
               + (travel_allowance if duration > 50 else 0)
    response = round(average_response_time × urgency_multiplier + distance × 2)

The response-time constants are rough heuristics, not measured travel times.
"""

from __future__ import annotations

import logging
import math

from armora.matching.models import MatchRequest, OfficerProfile, Urgency
from armora.reference import TierId

logger = logging.getLogger("armora.matching.estimates")

_URGENCY_MULTIPLIER: dict[Urgency, float] = {
    Urgency.IMMEDIATE: 0.5,
    Urgency.WITHIN_HOUR: 0.8,
    Urgency.WITHIN_DAY: 1.0,
    Urgency.SCHEDULED: 1.2,
}

# Minutes added per km between officer and principal
_MINUTES_PER_KM = 2.0

# Engagements longer than this (hours) include the officer's travel allowance
_TRAVEL_ALLOWANCE_THRESHOLD_HOURS = 50.0


def estimate_price(officer: OfficerProfile, criteria: MatchRequest) -> float:
    """Estimated engagement price in GBP for the request's budget tier.

    Falls back to the officer's essential rate when no rate is listed for the
    requested tier.
    """
    rate = officer.hourly_rates.get(criteria.budget)
    if not rate:
        rate = officer.hourly_rates.get(TierId.ESSENTIAL, 0.0)
        logger.debug(
            "Officer %s has no %s rate; using essential rate %.2f",
            officer.id,
            criteria.budget.value,
            rate,
        )

    hours = max(criteria.duration, officer.minimum_engagement)
    travel = officer.travel_allowance if criteria.duration > _TRAVEL_ALLOWANCE_THRESHOLD_HOURS else 0.0
    return rate * hours + travel


def estimate_response_time(officer: OfficerProfile, distance_km: float, urgency: Urgency) -> int:
    """Estimated minutes until the officer reaches the principal."""
    minutes = (
        officer.average_response_time * _URGENCY_MULTIPLIER[urgency]
        + distance_km * _MINUTES_PER_KM
    )
    return _round_half_up(minutes)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
