"""Unscored officer queries — specialization lookup, quick recommendations
and an available-now radius search.

Each query only returns active, verified officers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from armora.matching.geo import haversine_km
from armora.matching.models import (
    AvailabilityStatus,
    Location,
    OfficerProfile,
    SpecializationType,
)

logger = logging.getLogger("armora.matching.queries")

# Experience stops contributing to the recommendation blend past this many years
_RECOMMENDATION_EXPERIENCE_CAP = 20.0
_RECOMMENDATION_RATING_WEIGHT = 0.7
_RECOMMENDATION_EXPERIENCE_WEIGHT = 0.015


def _is_bookable(officer: OfficerProfile) -> bool:
    return officer.is_active and officer.is_verified


def _specialization_years(officer: OfficerProfile, specialization: SpecializationType) -> float:
    for s in officer.specializations:
        if s.type == specialization:
            return s.years_experience
    return 0.0


def find_by_specialization(
    specialization: SpecializationType,
    officers: Iterable[OfficerProfile],
    limit: int = 10,
) -> list[OfficerProfile]:
    """Officers holding ``specialization``, most experienced in it first.

    Ties on specialization years are broken by overall rating.
    """
    holders = [
        o
        for o in officers
        if _is_bookable(o) and specialization in o.specialization_types()
    ]
    holders.sort(key=lambda o: (-_specialization_years(o, specialization), -o.rating))
    return holders[:limit]


def recommended_officers(
    officers: Iterable[OfficerProfile],
    limit: int = 5,
) -> list[OfficerProfile]:
    """Top available-now officers by a rating-weighted blend with experience."""

    def blend(officer: OfficerProfile) -> float:
        years = min(officer.years_of_experience, _RECOMMENDATION_EXPERIENCE_CAP)
        return (
            officer.rating * _RECOMMENDATION_RATING_WEIGHT
            + years * _RECOMMENDATION_EXPERIENCE_WEIGHT
        )

    available = [
        o
        for o in officers
        if _is_bookable(o) and o.availability.status == AvailabilityStatus.AVAILABLE_NOW
    ]
    available.sort(key=blend, reverse=True)
    return available[:limit]


def available_now(
    location: Location,
    officers: Iterable[OfficerProfile],
    max_distance_km: float = 50.0,
) -> list[OfficerProfile]:
    """Available-now officers with a known position within ``max_distance_km``."""
    nearby: list[OfficerProfile] = []
    for officer in officers:
        if not _is_bookable(officer):
            continue
        if officer.availability.status != AvailabilityStatus.AVAILABLE_NOW:
            continue
        if officer.current_location is None:
            continue

        distance = haversine_km(
            location.latitude,
            location.longitude,
            officer.current_location.latitude,
            officer.current_location.longitude,
        )
        if distance <= max_distance_km:
            nearby.append(officer)

    logger.debug(
        "%d officers available within %.1fkm of (%.4f, %.4f)",
        len(nearby),
        max_distance_km,
        location.latitude,
        location.longitude,
    )
    return nearby
