"""Armora pricing package — protection booking prices.

Exports the public API for pricing:

- :func:`calculate_pricing` / :class:`PricingEngine` — itemised price for a tier and assessment
- :func:`get_recommended_tier` — tier suggestion from a security assessment
- :func:`format_currency` — GBP display formatting
"""

from armora.pricing.engine import VAT_RATE, PricingEngine, calculate_pricing
from armora.pricing.formatting import format_currency
from armora.pricing.recommendation import get_recommended_tier

__all__ = [
    "PricingEngine",
    "calculate_pricing",
    "get_recommended_tier",
    "format_currency",
    "VAT_RATE",
]
