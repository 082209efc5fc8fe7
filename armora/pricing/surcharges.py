"""Surcharge rules — time of day/week, assessed risk, and per-hour special
requirements.

The time surcharge reads the wall-clock fields of an explicit
``evaluation_time`` so that a quote is reproducible for a given instant.
"""

from __future__ import annotations

from datetime import datetime

from armora.pricing.models import RiskLevel, SpecialRequirements

# Time-based multipliers; the highest applicable one wins
TIME_SURCHARGE_RATES: dict[str, float] = {
    "standard": 1.0,    # 06:00 - 18:00
    "evening": 1.5,     # 18:00 - 23:00
    "late_night": 2.0,  # 23:00 - 06:00
    "weekend": 1.3,     # Saturday / Sunday
    "holiday": 2.5,     # bank holidays, caller-flagged
}

RISK_SURCHARGE_RATES: dict[RiskLevel, float] = {
    RiskLevel.LOW: 1.0,
    RiskLevel.MEDIUM: 1.2,
    RiskLevel.HIGH: 1.5,
}

# GBP per hour
SPECIAL_REQUIREMENTS_RATES: dict[str, float] = {
    "k9_unit": 25.0,       # K9 unit and handler
    "armed": 35.0,         # licensed firearms officer
    "diplomatic": 45.0,    # diplomatic protocol specialist
    "surveillance": 20.0,  # counter-surveillance specialist
    "medical": 15.0,       # medical response trained CPO
}

_EVENING_START_HOUR = 18
_LATE_NIGHT_START_HOUR = 23
_DAY_START_HOUR = 6
_WEEKEND_DAYS = (5, 6)  # datetime.weekday(): Saturday, Sunday


def time_multiplier(evaluation_time: datetime, is_holiday: bool = False) -> float:
    """Highest time-based multiplier applicable at ``evaluation_time``.

    No holiday calendar is bundled; the holiday rate only applies when the
    caller passes ``is_holiday=True``.
    """
    multiplier = TIME_SURCHARGE_RATES["standard"]

    if evaluation_time.weekday() in _WEEKEND_DAYS:
        multiplier = max(multiplier, TIME_SURCHARGE_RATES["weekend"])

    hour = evaluation_time.hour
    if hour >= _LATE_NIGHT_START_HOUR or hour < _DAY_START_HOUR:
        multiplier = max(multiplier, TIME_SURCHARGE_RATES["late_night"])
    elif hour >= _EVENING_START_HOUR:
        multiplier = max(multiplier, TIME_SURCHARGE_RATES["evening"])

    if is_holiday:
        multiplier = max(multiplier, TIME_SURCHARGE_RATES["holiday"])

    return multiplier


def calculate_time_surcharge(
    subtotal: float, evaluation_time: datetime, is_holiday: bool = False
) -> float:
    return subtotal * (time_multiplier(evaluation_time, is_holiday) - 1)


def calculate_risk_surcharge(subtotal: float, threat_level: RiskLevel) -> float:
    return subtotal * (RISK_SURCHARGE_RATES[threat_level] - 1)


def calculate_special_requirements(requirements: SpecialRequirements, duration: float) -> float:
    total = 0.0
    for name in requirements.enabled():
        total += SPECIAL_REQUIREMENTS_RATES[name] * duration
    return total
