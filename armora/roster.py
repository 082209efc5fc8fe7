"""Officer roster — loads the officer directory snapshot from a JSON file and
answers filtered searches over it.

The file holds either a JSON list of officer profiles or an object with an
``officers`` list.  Profiles are validated with pydantic on load; the
matcher and queries only ever see the validated snapshot.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from armora.matching.models import (
    AvailabilityStatus,
    OfficerProfile,
    SIALevel,
    SpecializationType,
)

logger = logging.getLogger("armora.roster")

_OFFICER_LIST = TypeAdapter(list[OfficerProfile])


class ExperienceLevel(str, Enum):
    JUNIOR = "junior"            # under 5 years
    EXPERIENCED = "experienced"  # 5 to under 10
    SENIOR = "senior"            # 10 to under 15
    ELITE = "elite"              # 15 and over


class AvailabilityWindow(str, Enum):
    AVAILABLE_NOW = "available_now"
    AVAILABLE_TODAY = "available_today"
    AVAILABLE_THIS_WEEK = "available_this_week"


# (inclusive lower bound, exclusive upper bound) in years
_EXPERIENCE_BANDS: dict[ExperienceLevel, tuple[float, float | None]] = {
    ExperienceLevel.JUNIOR: (0.0, 5.0),
    ExperienceLevel.EXPERIENCED: (5.0, 10.0),
    ExperienceLevel.SENIOR: (10.0, 15.0),
    ExperienceLevel.ELITE: (15.0, None),
}

_TODAY_STATUSES = (AvailabilityStatus.AVAILABLE_NOW, AvailabilityStatus.AVAILABLE_SOON)


class OfficerSearchFilters(BaseModel):
    """Optional roster filters; unset filters do not restrict the search.

    List filters (``specializations``, ``languages``) match when the officer
    has *any* of the listed values.
    """

    availability: AvailabilityWindow | None = None
    specializations: list[SpecializationType] = Field(default_factory=list)
    experience_level: ExperienceLevel | None = None
    rating_minimum: float | None = Field(default=None, ge=0.0, le=5.0)
    max_hourly_rate: float | None = Field(default=None, gt=0.0)
    has_vehicle: bool = False
    languages: list[str] = Field(default_factory=list)
    coverage_area: str | None = None
    military_background: bool = False
    police_background: bool = False
    sia_level: SIALevel | None = None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_roster(path: str | Path) -> list[OfficerProfile]:
    """Load and validate the officer roster at ``path``.

    Raises
    ------
    FileNotFoundError
        When ``path`` does not exist.
    ValueError
        When the file cannot be read, is not valid JSON, or a profile fails
        validation.
    """
    roster_path = Path(path)
    try:
        with roster_path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as exc:
        raise ValueError(f"Roster {roster_path} is not valid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ValueError(f"Roster {roster_path} could not be read: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("officers", [])

    try:
        officers = _OFFICER_LIST.validate_python(payload)
    except ValidationError as exc:
        raise ValueError(f"Roster {roster_path} failed validation: {exc}") from exc

    logger.info("Loaded %d officers from %s", len(officers), roster_path)
    return officers


def get_officer_by_id(officers: Iterable[OfficerProfile], officer_id: str) -> OfficerProfile | None:
    for officer in officers:
        if officer.id == officer_id:
            return officer
    return None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def search_officers(
    officers: Iterable[OfficerProfile],
    filters: OfficerSearchFilters | None = None,
) -> list[OfficerProfile]:
    """Return officers passing every set filter, in roster order."""
    if filters is None:
        return list(officers)
    return [o for o in officers if _passes(o, filters)]


def _passes(officer: OfficerProfile, filters: OfficerSearchFilters) -> bool:
    status = officer.availability.status
    if filters.availability == AvailabilityWindow.AVAILABLE_NOW and status != AvailabilityStatus.AVAILABLE_NOW:
        return False
    if filters.availability == AvailabilityWindow.AVAILABLE_TODAY and status not in _TODAY_STATUSES:
        return False

    if filters.specializations:
        held = set(officer.specialization_types())
        if not any(s in held for s in filters.specializations):
            return False

    if filters.experience_level is not None:
        low, high = _EXPERIENCE_BANDS[filters.experience_level]
        years = officer.years_of_experience
        if years < low or (high is not None and years >= high):
            return False

    if filters.rating_minimum and officer.rating < filters.rating_minimum:
        return False

    if filters.max_hourly_rate:
        # Officers without listed rates never satisfy a rate cap
        lowest = min(officer.hourly_rates.values(), default=None)
        if lowest is None or lowest > filters.max_hourly_rate:
            return False

    if filters.has_vehicle and officer.vehicle is None:
        return False

    if filters.languages and not any(lang in officer.languages for lang in filters.languages):
        return False

    if filters.coverage_area and filters.coverage_area not in officer.coverage_areas:
        return False

    if filters.military_background and not officer.military_background.has_military_service:
        return False
    if filters.police_background and not officer.police_background.has_police_service:
        return False

    if filters.sia_level is not None and (officer.sia is None or officer.sia.level != filters.sia_level):
        return False

    return True
