"""Pricing engine — builds an itemised protection price for a service tier
and security assessment.

The calculation pipeline is:

    subtotal        = base_hourly_rate × duration
    before          = subtotal + time_surcharge + risk_surcharge + special
    after           = before − subscription_discount − duration_discount
    vat             = after × VAT_RATE
    total           = after + vat

Nothing is rounded during accumulation; use
:func:`armora.pricing.formatting.format_currency` for display.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum

from armora.pricing.discounts import (
    applicable_duration_discount,
    calculate_duration_discount,
    calculate_subscription_discount,
)
from armora.pricing.formatting import CURRENCY_SYMBOL, format_number
from armora.pricing.models import (
    BreakdownItem,
    BreakdownType,
    Discounts,
    PricingCalculation,
    SecurityAssessment,
    Surcharges,
)
from armora.pricing.surcharges import (
    calculate_risk_surcharge,
    calculate_special_requirements,
    calculate_time_surcharge,
)
from armora.reference import ServiceTier, normalise_tier_name

logger = logging.getLogger("armora.pricing.engine")

# UK standard VAT
VAT_RATE = 0.20


class PricingEngine:
    """Stateless protection pricing calculator.

    Usage::

        engine = PricingEngine()
        quote = engine.calculate(tier, assessment, evaluation_time=now)
    """

    def calculate(
        self,
        tier: ServiceTier,
        assessment: SecurityAssessment,
        has_subscription: bool = False,
        subscription_tier: str | Enum | None = None,
        *,
        evaluation_time: datetime,
        is_holiday: bool = False,
    ) -> PricingCalculation:
        """Price a booking.

        Parameters
        ----------
        tier:
            Selected service tier.
        assessment:
            Duration, threat level and special requirements.
        has_subscription:
            Whether the principal holds an active membership.
        subscription_tier:
            Membership tier name; ignored unless ``has_subscription``.
        evaluation_time:
            Instant whose local hour and weekday drive the time surcharge.
            Callers pass "now" explicitly.
        is_holiday:
            Apply the bank-holiday rate.

        Returns
        -------
        PricingCalculation
        """
        duration = assessment.duration
        base_rate = tier.base_hourly_rate
        subtotal = base_rate * duration

        time_surcharge = calculate_time_surcharge(subtotal, evaluation_time, is_holiday)
        risk_surcharge = calculate_risk_surcharge(subtotal, assessment.threat_level)
        special_total = calculate_special_requirements(assessment.special_requirements, duration)

        before_discounts = subtotal + time_surcharge + risk_surcharge + special_total

        subscription_discount = calculate_subscription_discount(
            before_discounts, has_subscription, subscription_tier
        )
        duration_discount = calculate_duration_discount(before_discounts, duration)

        after_discounts = before_discounts - subscription_discount - duration_discount
        vat_amount = after_discounts * VAT_RATE
        total_amount = after_discounts + vat_amount

        breakdown = self._build_breakdown(
            tier=tier,
            assessment=assessment,
            subtotal=subtotal,
            time_surcharge=time_surcharge,
            risk_surcharge=risk_surcharge,
            special_total=special_total,
            subscription_discount=subscription_discount,
            subscription_tier=subscription_tier,
            duration_discount=duration_discount,
            vat_amount=vat_amount,
        )

        logger.info(
            "Priced tier=%s duration=%sh threat=%s: total=%.2f (vat=%.2f)",
            tier.id.value,
            format_number(duration),
            assessment.threat_level.value,
            total_amount,
            vat_amount,
        )

        return PricingCalculation(
            tier=tier,
            base_rate=base_rate,
            duration=duration,
            subtotal=subtotal,
            surcharges=Surcharges(
                time_surcharge=time_surcharge,
                risk_surcharge=risk_surcharge,
                special_requirements=special_total,
            ),
            discounts=Discounts(
                subscription=subscription_discount,
                duration=duration_discount,
            ),
            vat_amount=vat_amount,
            total_amount=total_amount,
            breakdown=breakdown,
        )

    # ------------------------------------------------------------------
    # Breakdown
    # ------------------------------------------------------------------

    @staticmethod
    def _build_breakdown(
        *,
        tier: ServiceTier,
        assessment: SecurityAssessment,
        subtotal: float,
        time_surcharge: float,
        risk_surcharge: float,
        special_total: float,
        subscription_discount: float,
        subscription_tier: str | Enum | None,
        duration_discount: float,
        vat_amount: float,
    ) -> list[BreakdownItem]:
        """Assemble display lines; optional lines appear only when nonzero."""
        hours = format_number(assessment.duration)
        items = [
            BreakdownItem(
                label=f"{tier.name} ({hours} hours)",
                amount=subtotal,
                type=BreakdownType.BASE,
                description=f"{CURRENCY_SYMBOL}{format_number(tier.base_hourly_rate)}/hour × {hours} hours",
            )
        ]

        if time_surcharge > 0:
            items.append(
                BreakdownItem(
                    label="Time Surcharge",
                    amount=time_surcharge,
                    type=BreakdownType.SURCHARGE,
                    description="Evening/night/weekend premium",
                )
            )

        if risk_surcharge > 0:
            items.append(
                BreakdownItem(
                    label="Risk Level Surcharge",
                    amount=risk_surcharge,
                    type=BreakdownType.SURCHARGE,
                    description=f"{assessment.threat_level.value.capitalize()} risk assessment",
                )
            )

        if special_total > 0:
            active = [name.replace("_", " ") for name in assessment.special_requirements.enabled()]
            items.append(
                BreakdownItem(
                    label="Special Requirements",
                    amount=special_total,
                    type=BreakdownType.SURCHARGE,
                    description=", ".join(active),
                )
            )

        if subscription_discount > 0 and subscription_tier:
            items.append(
                BreakdownItem(
                    label="Subscription Discount",
                    amount=-subscription_discount,
                    type=BreakdownType.DISCOUNT,
                    description=f"{normalise_tier_name(subscription_tier).capitalize()} member discount",
                )
            )

        if duration_discount > 0:
            threshold = applicable_duration_discount(assessment.duration)
            items.append(
                BreakdownItem(
                    label="Duration Discount",
                    amount=-duration_discount,
                    type=BreakdownType.DISCOUNT,
                    description=threshold.label if threshold else None,
                )
            )

        items.append(
            BreakdownItem(
                label=f"VAT ({VAT_RATE:.0%})",
                amount=vat_amount,
                type=BreakdownType.TAX,
                description="UK Value Added Tax",
            )
        )
        return items


def calculate_pricing(
    tier: ServiceTier,
    assessment: SecurityAssessment,
    has_subscription: bool = False,
    subscription_tier: str | Enum | None = None,
    *,
    evaluation_time: datetime,
    is_holiday: bool = False,
) -> PricingCalculation:
    """Price a booking; see :meth:`PricingEngine.calculate`."""
    return PricingEngine().calculate(
        tier,
        assessment,
        has_subscription,
        subscription_tier,
        evaluation_time=evaluation_time,
        is_holiday=is_holiday,
    )
