"""Discount rules — member subscriptions and long bookings.

Both discounts are computed on the same pre-discount amount and are not
compounded.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from armora.reference import normalise_tier_name

SUBSCRIPTION_DISCOUNTS: dict[str, float] = {
    "essential": 0.10,
    "executive": 0.20,
    "shadow": 0.30,
}


class DurationDiscount(NamedTuple):
    min_hours: float
    rate: float
    label: str


# Checked in order; the first threshold met applies
DURATION_DISCOUNTS: tuple[DurationDiscount, ...] = (
    DurationDiscount(24.0, 0.15, "24+ hours: 15% off"),
    DurationDiscount(12.0, 0.10, "12+ hours: 10% off"),
    DurationDiscount(8.0, 0.05, "8+ hours: 5% off"),
)


def calculate_subscription_discount(
    amount: float,
    has_subscription: bool,
    subscription_tier: str | Enum | None,
) -> float:
    """Member discount; zero without an active subscription or a known tier."""
    if not has_subscription or not subscription_tier:
        return 0.0
    rate = SUBSCRIPTION_DISCOUNTS.get(normalise_tier_name(subscription_tier))
    return amount * rate if rate else 0.0


def applicable_duration_discount(duration: float) -> DurationDiscount | None:
    for discount in DURATION_DISCOUNTS:
        if duration >= discount.min_hours:
            return discount
    return None


def calculate_duration_discount(amount: float, duration: float) -> float:
    discount = applicable_duration_discount(duration)
    return amount * discount.rate if discount else 0.0
