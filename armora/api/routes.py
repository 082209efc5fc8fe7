"""Armora FastAPI application — officer matching and protection pricing API.

Endpoints
---------
POST  /v1/match                                   — rank officers for a request
GET   /v1/officers                                — search the roster
GET   /v1/officers/available                      — available-now radius search
GET   /v1/officers/recommended                    — quick recommendations
GET   /v1/officers/by-specialization/{specialization} — specialization lookup
GET   /v1/officers/{officer_id}                   — single officer
GET   /v1/tiers                                   — service tier catalogue
POST  /v1/pricing/quote                           — itemised price
POST  /v1/pricing/recommend-tier                  — tier recommendation
GET   /v1/health                                  — system health check

Authentication is via the ``X-API-Key`` header.  Rate limiting enforces
``settings.rate_limit_per_minute`` requests per minute per API key using an
in-memory sliding window counter.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator
from zoneinfo import ZoneInfo

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware

from armora import __version__
from armora.api.schemas import (
    HealthResponse,
    MatchInput,
    MatchResponse,
    OfficerListResponse,
    QuoteInput,
    QuoteResponse,
    TierListResponse,
)
from armora.config import settings
from armora.matching import MatchingEngine, available_now, find_by_specialization, recommended_officers
from armora.matching.models import (
    Location,
    OfficerProfile,
    SIALevel,
    SpecializationType,
)
from armora.pricing import PricingEngine, format_currency, get_recommended_tier
from armora.pricing.models import SecurityAssessment
from armora.reference import SERVICE_TIERS, ServiceTier, get_service_tier
from armora.roster import (
    AvailabilityWindow,
    ExperienceLevel,
    OfficerSearchFilters,
    get_officer_by_id,
    load_roster,
    search_officers,
)

logger = logging.getLogger("armora.api")

# ---------------------------------------------------------------------------
# In-memory rate limiter
# ---------------------------------------------------------------------------

# Maps api_key → list of request timestamps (monotonic seconds)
_rate_limit_windows: dict[str, list[float]] = defaultdict(list)

_RATE_LIMIT_WINDOW = 60.0   # seconds


def _check_rate_limit(api_key: str) -> None:
    """Enforce the per-key sliding-window request limit.

    Raises HTTP 429 when the limit is exceeded.
    """
    now = time.monotonic()
    cutoff = now - _RATE_LIMIT_WINDOW
    window = [t for t in _rate_limit_windows[api_key] if t > cutoff]
    _rate_limit_windows[api_key] = window
    if len(window) >= settings.rate_limit_per_minute:
        logger.warning("Rate limit exceeded for key=%s", api_key[:8])
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded: {settings.rate_limit_per_minute} requests per 60 seconds.",
        )
    window.append(now)


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------

_roster: list[OfficerProfile] | None = None
_matching_engine = MatchingEngine()
_pricing_engine = PricingEngine()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle handler.

    On startup: loads the officer roster snapshot.  A missing or invalid
    roster is logged and the API starts with an empty roster so pricing
    endpoints stay available.
    """
    global _roster

    logger.info("Armora API starting up (version=%s)", __version__)

    try:
        _roster = load_roster(settings.roster_path)
    except (FileNotFoundError, ValueError) as exc:
        logger.warning("Officer roster unavailable (%s); starting with an empty roster", exc)
        _roster = []

    yield  # ← application runs here

    logger.info("Armora API shutting down")
    _roster = None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Armora Protection API",
    description=(
        "Close Protection Officer matching and protection booking pricing "
        "for the Armora booking service."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Middleware — request logging
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every inbound request with timing."""
    start = time.monotonic()
    response = await call_next(request)
    elapsed_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s → %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Auth dependency
# ---------------------------------------------------------------------------


async def require_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """Validate the ``X-API-Key`` header and enforce rate limiting.

    Raises
    ------
    HTTPException
        403 if the key is invalid; 429 if rate limit is exceeded.
    """
    if x_api_key != settings.armora_api_key:
        logger.warning("Invalid API key attempt: %s...", x_api_key[:6])
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key.",
        )
    _check_rate_limit(x_api_key)
    return x_api_key


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_roster() -> list[OfficerProfile]:
    """Return the loaded roster or raise 503."""
    if _roster is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Officer roster not loaded.",
        )
    return _roster


def _now() -> datetime:
    return datetime.now(ZoneInfo(settings.pricing_timezone))


# ---------------------------------------------------------------------------
# Matching endpoints
# ---------------------------------------------------------------------------


@app.post(
    "/v1/match",
    response_model=MatchResponse,
    summary="Rank officers for a protection request",
    tags=["Matching"],
)
async def match_officers(
    body: MatchInput,
    _key: str = Depends(require_api_key),
) -> MatchResponse:
    """Score every eligible officer in the roster against the request and
    return them ranked by match score.
    """
    roster = _get_roster()
    t0 = time.monotonic()

    matches = _matching_engine.match(body.to_request(), roster)
    eligible = len(matches)
    if body.limit is not None:
        matches = matches[: body.limit]

    return MatchResponse(
        matches=matches,
        officers_evaluated=len(roster),
        officers_eligible=eligible,
        match_time_ms=round((time.monotonic() - t0) * 1000, 1),
    )


@app.get(
    "/v1/officers",
    response_model=OfficerListResponse,
    summary="Search the officer roster",
    tags=["Officers"],
)
async def list_officers(
    availability: AvailabilityWindow | None = Query(default=None),
    specializations: list[SpecializationType] = Query(default=[]),
    experience_level: ExperienceLevel | None = Query(default=None),
    rating_minimum: float | None = Query(default=None, ge=0.0, le=5.0),
    max_hourly_rate: float | None = Query(default=None, gt=0.0),
    has_vehicle: bool = Query(default=False),
    languages: list[str] = Query(default=[]),
    coverage_area: str | None = Query(default=None),
    military_background: bool = Query(default=False),
    police_background: bool = Query(default=False),
    sia_level: SIALevel | None = Query(default=None),
    _key: str = Depends(require_api_key),
) -> OfficerListResponse:
    """Return roster officers passing every supplied filter."""
    filters = OfficerSearchFilters(
        availability=availability,
        specializations=specializations,
        experience_level=experience_level,
        rating_minimum=rating_minimum,
        max_hourly_rate=max_hourly_rate,
        has_vehicle=has_vehicle,
        languages=languages,
        coverage_area=coverage_area,
        military_background=military_background,
        police_background=police_background,
        sia_level=sia_level,
    )
    officers = search_officers(_get_roster(), filters)
    return OfficerListResponse(officers=officers, count=len(officers))


@app.get(
    "/v1/officers/available",
    response_model=OfficerListResponse,
    summary="Officers available now near a location",
    tags=["Officers"],
)
async def list_available_officers(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    max_distance_km: float = Query(default=50.0, gt=0.0),
    _key: str = Depends(require_api_key),
) -> OfficerListResponse:
    location = Location(latitude=latitude, longitude=longitude)
    officers = available_now(location, _get_roster(), max_distance_km=max_distance_km)
    return OfficerListResponse(officers=officers, count=len(officers))


@app.get(
    "/v1/officers/recommended",
    response_model=OfficerListResponse,
    summary="Top available officers",
    tags=["Officers"],
)
async def list_recommended_officers(
    limit: int = Query(default=5, ge=1, le=50),
    _key: str = Depends(require_api_key),
) -> OfficerListResponse:
    officers = recommended_officers(_get_roster(), limit=limit)
    return OfficerListResponse(officers=officers, count=len(officers))


@app.get(
    "/v1/officers/by-specialization/{specialization}",
    response_model=OfficerListResponse,
    summary="Officers holding a specialization",
    tags=["Officers"],
)
async def list_officers_by_specialization(
    specialization: SpecializationType,
    limit: int = Query(default=10, ge=1, le=100),
    _key: str = Depends(require_api_key),
) -> OfficerListResponse:
    officers = find_by_specialization(specialization, _get_roster(), limit=limit)
    return OfficerListResponse(officers=officers, count=len(officers))


@app.get(
    "/v1/officers/{officer_id}",
    response_model=OfficerProfile,
    summary="Get an officer profile",
    tags=["Officers"],
)
async def get_officer(
    officer_id: str,
    _key: str = Depends(require_api_key),
) -> OfficerProfile:
    officer = get_officer_by_id(_get_roster(), officer_id)
    if officer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Officer {officer_id!r} not found.",
        )
    return officer


# ---------------------------------------------------------------------------
# Pricing endpoints
# ---------------------------------------------------------------------------


@app.get(
    "/v1/tiers",
    response_model=TierListResponse,
    summary="List service tiers",
    tags=["Pricing"],
)
async def list_tiers(_key: str = Depends(require_api_key)) -> TierListResponse:
    return TierListResponse(tiers=list(SERVICE_TIERS))


@app.post(
    "/v1/pricing/quote",
    response_model=QuoteResponse,
    summary="Price a protection booking",
    tags=["Pricing"],
)
async def quote(
    body: QuoteInput,
    _key: str = Depends(require_api_key),
) -> QuoteResponse:
    """Return an itemised price evaluated at the current local time."""
    evaluated_at = _now()
    calculation = _pricing_engine.calculate(
        get_service_tier(body.tier_id),
        body.assessment,
        body.has_subscription,
        body.subscription_tier,
        evaluation_time=evaluated_at,
        is_holiday=body.is_holiday,
    )
    return QuoteResponse(
        calculation=calculation,
        formatted_total=format_currency(calculation.total_amount),
        formatted_vat=format_currency(calculation.vat_amount),
        evaluated_at=evaluated_at.isoformat(),
        recommended_tier=get_recommended_tier(body.assessment).id,
    )


@app.post(
    "/v1/pricing/recommend-tier",
    response_model=ServiceTier,
    summary="Recommend a service tier",
    tags=["Pricing"],
)
async def recommend_tier(
    body: SecurityAssessment,
    _key: str = Depends(require_api_key),
) -> ServiceTier:
    return get_recommended_tier(body)


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


@app.get(
    "/v1/health",
    response_model=HealthResponse,
    summary="System health check",
    tags=["System"],
)
async def health_check(
    _key: str = Depends(require_api_key),
) -> HealthResponse:
    """Report version and roster size; ``degraded`` when no officers are loaded."""
    officers = _roster or []
    return HealthResponse(
        status="ok" if officers else "degraded",
        version=__version__,
        officers_loaded=len(officers),
        roster_path=settings.roster_path,
    )
