"""Pricing models — the security assessment input and the itemised pricing
calculation output."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from armora.reference import ServiceTier


class RiskLevel(str, Enum):
    """Threat level captured by the security assessment."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LocationType(str, Enum):
    RESIDENTIAL = "residential"
    CORPORATE = "corporate"
    EVENT = "event"
    PUBLIC = "public"


class BreakdownType(str, Enum):
    BASE = "base"
    SURCHARGE = "surcharge"
    DISCOUNT = "discount"
    TAX = "tax"


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


class SpecialRequirements(BaseModel):
    """Optional add-on services, each billed per hour of the booking."""

    k9_unit: bool = False
    armed: bool = False
    diplomatic: bool = False
    surveillance: bool = False
    medical: bool = False

    def enabled(self) -> list[str]:
        """Names of the enabled requirements in declaration order."""
        return [name for name, on in self.model_dump().items() if on]


class SecurityAssessment(BaseModel):
    """Outcome of the booking questionnaire used for pricing.

    Attributes
    ----------
    duration:
        Booking length in hours.  Bookings are at least 2 hours by
        convention; the pricing function does not enforce it.
    threat_level:
        Assessed risk, driving the risk surcharge.
    special_requirements:
        Per-hour add-ons.
    location_type:
        Only used for tier recommendation.
    """

    duration: float
    threat_level: RiskLevel = RiskLevel.LOW
    special_requirements: SpecialRequirements = Field(default_factory=SpecialRequirements)
    location_type: LocationType = LocationType.CORPORATE


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class BreakdownItem(BaseModel):
    """One line of the price breakdown.  Discounts carry negative amounts."""

    label: str
    amount: float
    type: BreakdownType
    description: str | None = None


class Surcharges(BaseModel):
    time_surcharge: float = 0.0
    risk_surcharge: float = 0.0
    special_requirements: float = 0.0

    @property
    def total(self) -> float:
        return self.time_surcharge + self.risk_surcharge + self.special_requirements


class Discounts(BaseModel):
    subscription: float = 0.0
    duration: float = 0.0

    @property
    def total(self) -> float:
        return self.subscription + self.duration


class PricingCalculation(BaseModel):
    """Itemised price for a tier and assessment.

    ``total_amount`` equals ``(subtotal + surcharges − discounts) × 1.20``.
    Amounts are never rounded here; rounding happens only when formatting.
    """

    tier: ServiceTier
    base_rate: float
    duration: float
    subtotal: float
    surcharges: Surcharges
    discounts: Discounts
    vat_amount: float
    total_amount: float
    breakdown: list[BreakdownItem] = Field(default_factory=list)
