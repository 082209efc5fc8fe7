"""Pydantic schemas for the Armora API request/response models.

Request bodies wrap the matching and pricing inputs; responses add
roster counts and display-formatted amounts to the kernel results.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from armora.matching.models import MatchRequest, MatchResult, OfficerProfile
from armora.pricing.models import PricingCalculation, SecurityAssessment
from armora.reference import ServiceTier, TierId


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class MatchInput(MatchRequest):
    """Inbound protection request for ``/v1/match``.

    Identical to :class:`MatchRequest` plus an optional result cap.
    """

    limit: int | None = Field(default=None, ge=1, le=100, description="Maximum matches returned")

    def to_request(self) -> MatchRequest:
        return MatchRequest.model_validate(self.model_dump(exclude={"limit"}))


class QuoteInput(BaseModel):
    """Inbound pricing request for ``/v1/pricing/quote``.

    Attributes
    ----------
    tier_id:
        Selected service tier.
    assessment:
        Security assessment from the booking questionnaire.
    has_subscription:
        Whether the principal holds an active membership.
    subscription_tier:
        Membership tier, used only when ``has_subscription`` is true.
    is_holiday:
        Apply the bank-holiday time rate.
    """

    tier_id: TierId
    assessment: SecurityAssessment
    has_subscription: bool = False
    subscription_tier: TierId | None = None
    is_holiday: bool = False


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class MatchResponse(BaseModel):
    """Ranked matches for a protection request."""

    matches: list[MatchResult]
    officers_evaluated: int
    officers_eligible: int
    match_time_ms: float


class OfficerListResponse(BaseModel):
    officers: list[OfficerProfile]
    count: int


class QuoteResponse(BaseModel):
    """Price calculation plus display-formatted amounts."""

    calculation: PricingCalculation
    formatted_total: str
    formatted_vat: str
    evaluated_at: str
    recommended_tier: TierId


class TierListResponse(BaseModel):
    tiers: list[ServiceTier]


class HealthResponse(BaseModel):
    status: str = Field(..., description="ok | degraded")
    version: str
    officers_loaded: int = 0
    roster_path: str | None = None
