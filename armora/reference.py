"""Static reference data shared by matching and pricing — the three service
tiers and their base hourly rates.

Tier definitions are immutable; callers receive the shared frozen models.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("armora.reference")


class TierId(str, Enum):
    """Service tier identifiers, used as matching budgets and pricing tiers."""

    ESSENTIAL = "essential"
    EXECUTIVE = "executive"
    SHADOW = "shadow"


class ServiceTier(BaseModel):
    """A fixed service level with its base hourly rate and feature list."""

    model_config = ConfigDict(frozen=True)

    id: TierId
    name: str
    base_hourly_rate: float = Field(..., gt=0.0, description="GBP per hour")
    description: str
    features: tuple[str, ...] = ()


SERVICE_TIERS: tuple[ServiceTier, ...] = (
    ServiceTier(
        id=TierId.ESSENTIAL,
        name="Essential Protection",
        base_hourly_rate=50.0,
        description="Standard close protection with SIA Level 2 certified CPO",
        features=(
            "SIA Level 2 certified Close Protection Officer",
            "2-hour minimum booking",
            "Standard response time (30 minutes)",
            "Basic threat assessment",
            "Emergency contact protocol",
            "Professional protection vehicle",
        ),
    ),
    ServiceTier(
        id=TierId.EXECUTIVE,
        name="Executive Protection",
        base_hourly_rate=75.0,
        description="Premium protection with advanced security protocols",
        features=(
            "SIA Level 3 certified Close Protection Officer",
            "Priority response (15 minutes)",
            "Advanced threat assessment",
            "Surveillance detection",
            "Executive vehicle (BMW 5 Series)",
            "Direct emergency services liaison",
            "Detailed security briefing",
            "Route planning and reconnaissance",
        ),
    ),
    ServiceTier(
        id=TierId.SHADOW,
        name="Shadow Protocol",
        base_hourly_rate=65.0,
        description="Discreet plainclothes protection for VIP clients",
        features=(
            "Former Special Forces / Elite trained CPO",
            "Covert surveillance detection",
            "Counter-surveillance protocols",
            "Discreet plainclothes protection",
            "Advanced threat neutralization",
            "Intelligence gathering",
            "Multiple CPO coordination",
            "Diplomatic protection protocols",
        ),
    ),
)

_TIERS_BY_ID: dict[TierId, ServiceTier] = {tier.id: tier for tier in SERVICE_TIERS}


def normalise_tier_name(tier_id: TierId | Enum | str) -> str:
    """Lower-case tier name from a plain string or a tier enum member."""
    if isinstance(tier_id, Enum):
        tier_id = tier_id.value
    return str(tier_id).strip().lower()


def get_service_tier(tier_id: TierId | str) -> ServiceTier:
    """Return the tier for ``tier_id``, matched case-insensitively.

    Unknown ids fall back to the Essential tier rather than raising.
    """
    try:
        return _TIERS_BY_ID[TierId(normalise_tier_name(tier_id))]
    except ValueError:
        logger.warning("Unknown service tier %r; falling back to essential", tier_id)
        return _TIERS_BY_ID[TierId.ESSENTIAL]
