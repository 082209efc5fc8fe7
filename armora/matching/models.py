"""Domain models for officer matching — officer profiles, match requests and
scored match results.

Ordinal and tag fields are closed enumerations so that every lookup table in
the scorer is keyed exhaustively.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from armora.reference import TierId


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ThreatLevel(str, Enum):
    """Ordinal threat classification of a protection request."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


class Urgency(str, Enum):
    """How soon protection is needed."""

    IMMEDIATE = "immediate"
    WITHIN_HOUR = "within_hour"
    WITHIN_DAY = "within_day"
    SCHEDULED = "scheduled"


class AvailabilityStatus(str, Enum):
    AVAILABLE_NOW = "Available_Now"
    AVAILABLE_SOON = "Available_Soon"
    ON_ASSIGNMENT = "On_Assignment"
    OFF_DUTY = "Off_Duty"
    EMERGENCY_ONLY = "Emergency_Only"


class SpecializationType(str, Enum):
    VIP_PROTECTION = "VIP_Protection"
    RESIDENTIAL_SECURITY = "Residential_Security"
    EVENT_SECURITY = "Event_Security"
    CLOSE_PROTECTION = "Close_Protection"
    CORPORATE_SECURITY = "Corporate_Security"
    DIPLOMATIC_PROTECTION = "Diplomatic_Protection"
    COUNTER_SURVEILLANCE = "Counter_Surveillance"
    EXECUTIVE_TRANSPORT = "Executive_Transport"
    HOSTILE_ENVIRONMENT = "Hostile_Environment"
    MARITIME_SECURITY = "Maritime_Security"


class SIALevel(str, Enum):
    LEVEL_2 = "Level_2"
    LEVEL_3 = "Level_3"
    LEVEL_4 = "Level_4"


class SecurityClearance(str, Enum):
    SC = "SC"
    DV = "DV"
    ENHANCED_DV = "Enhanced_DV"


# ---------------------------------------------------------------------------
# Officer profile
# ---------------------------------------------------------------------------


class Location(BaseModel):
    """Geographic position with optional postal details."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    address: str | None = None
    postcode: str | None = None
    city: str | None = None
    region: str | None = None


class SIABadge(BaseModel):
    """Security Industry Authority licence."""

    license_number: str
    level: SIALevel
    verified: bool = False
    expiry_date: str | None = None


class MilitaryBackground(BaseModel):
    has_military_service: bool = False
    branch: str | None = None
    years_of_service: int | None = None
    security_clearance: SecurityClearance | None = None


class PoliceBackground(BaseModel):
    has_police_service: bool = False
    force: str | None = None
    years_of_service: int | None = None


class Specialization(BaseModel):
    type: SpecializationType
    years_experience: float = Field(default=0.0, ge=0.0)
    certifications: list[str] = Field(default_factory=list)


class WorkingDay(BaseModel):
    start: str = "09:00"
    end: str = "17:00"
    available: bool = True


class Availability(BaseModel):
    """Current availability of an officer.

    Attributes
    ----------
    status:
        Current :class:`AvailabilityStatus`.
    response_time:
        Quoted response time in minutes for the current status.
    next_available:
        ISO timestamp of the next free slot, if known.
    working_hours:
        Weekday name (``"monday"`` .. ``"sunday"``) → working window.
    """

    status: AvailabilityStatus
    response_time: float = Field(default=30.0, ge=0.0)
    next_available: str | None = None
    working_hours: dict[str, WorkingDay] = Field(default_factory=dict)


class Vehicle(BaseModel):
    make: str
    model: str
    type: str = "Standard"
    registration: str | None = None
    capacity: int = 4


class OfficerProfile(BaseModel):
    """Read-only snapshot of a Close Protection Officer from the directory.

    Only ``is_active`` and ``is_verified`` officers are eligible for
    matching.  ``hourly_rates`` is keyed by :class:`TierId` value.
    """

    id: str
    first_name: str
    last_name: str
    call_sign: str | None = None
    nationality: str | None = None
    languages: list[str] = Field(default_factory=list)

    sia: SIABadge | None = None
    years_of_experience: float = Field(default=0.0, ge=0.0)
    military_background: MilitaryBackground = Field(default_factory=MilitaryBackground)
    police_background: PoliceBackground = Field(default_factory=PoliceBackground)
    specializations: list[Specialization] = Field(default_factory=list)

    availability: Availability
    current_location: Location | None = None
    coverage_areas: list[str] = Field(default_factory=list)

    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    total_assignments: int = Field(default=0, ge=0)
    completed_assignments: int = Field(default=0, ge=0)
    average_response_time: float = Field(default=30.0, ge=0.0)
    reliability_score: float = Field(default=0.0, ge=0.0, le=100.0)

    vehicle: Vehicle | None = None
    hourly_rates: dict[TierId, float] = Field(default_factory=dict)
    minimum_engagement: float = Field(default=0.0, ge=0.0)
    travel_allowance: float = Field(default=0.0, ge=0.0)

    is_active: bool = True
    is_verified: bool = False
    tags: list[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def specialization_types(self) -> list[SpecializationType]:
        return [s.type for s in self.specializations]


# ---------------------------------------------------------------------------
# Request / result
# ---------------------------------------------------------------------------


class MatchRequest(BaseModel):
    """A principal's protection request submitted to the matcher.

    Attributes
    ----------
    principal_location:
        Where protection is required.
    threat_level:
        Assessed threat; drives the experience requirement.
    required_specializations:
        Specializations the officer should hold.
    preferred_experience:
        Minimum preferred years of experience (informational).
    urgency:
        How soon protection is needed.
    budget:
        Service tier whose hourly rate is used for the price estimate.
    duration:
        Expected engagement length in hours.
    vehicle_required:
        The principal needs the officer to bring a vehicle.
    language_preferences:
        Languages the principal would like the officer to speak.
    security_clearance_required:
        Informational; clearance already earns a bonus.
    """

    principal_location: Location
    threat_level: ThreatLevel
    required_specializations: list[SpecializationType] = Field(default_factory=list)
    preferred_experience: float = Field(default=0.0, ge=0.0)
    urgency: Urgency
    budget: TierId = TierId.ESSENTIAL
    duration: float = Field(..., description="Expected hours")
    vehicle_required: bool = False
    language_preferences: list[str] = Field(default_factory=list)
    security_clearance_required: bool = False


class MatchResult(BaseModel):
    """One scored officer returned by the matcher.

    Attributes
    ----------
    officer:
        The matched officer profile.
    match_score:
        Final score in [0, 100], rounded to 2 decimal places.
    match_reasons:
        Up to three human-readable reasons, highest priority first.
    proximity_km:
        Great-circle distance to the principal, rounded to 2 decimal places.
    estimated_response_time:
        Estimated minutes until the officer arrives.
    price_estimate:
        Estimated engagement price in GBP.
    components:
        Sub-scores and bonus total behind ``match_score``.
    """

    officer: OfficerProfile
    match_score: float = Field(..., ge=0.0, le=100.0)
    match_reasons: list[str] = Field(default_factory=list, max_length=3)
    proximity_km: float
    estimated_response_time: int
    price_estimate: float
    components: dict[str, Any] = Field(default_factory=dict)
