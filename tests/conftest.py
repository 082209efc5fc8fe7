"""Shared fixtures: officer profile and request builders."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from armora.matching.models import (
    Availability,
    AvailabilityStatus,
    Location,
    MatchRequest,
    OfficerProfile,
    Specialization,
    ThreatLevel,
    Urgency,
)
from armora.reference import TierId

# Central London
LONDON = Location(latitude=51.5074, longitude=-0.1278, city="London")

# A Wednesday at 10:00, standard daytime rate
WEEKDAY_MORNING = datetime(2025, 3, 12, 10, 0)


def _officer(officer_id: str = "cpo-1", **overrides: Any) -> OfficerProfile:
    data: dict[str, Any] = {
        "id": officer_id,
        "first_name": "Sam",
        "last_name": "Carter",
        "languages": ["English"],
        "years_of_experience": 6,
        "availability": Availability(status=AvailabilityStatus.AVAILABLE_NOW, response_time=20),
        "current_location": LONDON,
        "rating": 4.5,
        "average_response_time": 45,
        "hourly_rates": {TierId.ESSENTIAL: 50.0, TierId.EXECUTIVE: 75.0, TierId.SHADOW: 65.0},
        "is_active": True,
        "is_verified": True,
    }
    specializations = overrides.pop("specializations", None)
    if specializations is not None:
        data["specializations"] = [
            s if isinstance(s, Specialization) else Specialization(type=s, years_experience=3)
            for s in specializations
        ]
    status = overrides.pop("status", None)
    if status is not None:
        data["availability"] = Availability(status=status)
    data.update(overrides)
    return OfficerProfile(**data)


def _request(**overrides: Any) -> MatchRequest:
    data: dict[str, Any] = {
        "principal_location": LONDON,
        "threat_level": ThreatLevel.LOW,
        "urgency": Urgency.SCHEDULED,
        "duration": 4,
    }
    data.update(overrides)
    return MatchRequest(**data)


@pytest.fixture
def make_officer():
    return _officer


@pytest.fixture
def make_request():
    return _request


@pytest.fixture
def london() -> Location:
    return LONDON


@pytest.fixture
def weekday_morning() -> datetime:
    return WEEKDAY_MORNING
