"""Pass-through fee calculator used before platform fees were capped.

Superseded by :func:`lodgetix.fees.calculate_fees`. The platform fee here is
uncapped, comes out of the organiser's share and is not added to the total.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from decimal import Decimal

from lodgetix.amounts import format_amount, quantize_amount, require_amount
from lodgetix.enums import FeeMode
from lodgetix.fees import gross_up
from lodgetix.rates import select_rates


@dataclass(frozen=True)
class LegacyFeeCalculation:
    subtotal: Decimal
    stripe_fee: Decimal
    platform_fee: Decimal
    total: Decimal

    @property
    def organization_receives(self) -> Decimal:
        return self.subtotal - self.platform_fee


def calculate_stripe_fees(
    subtotal: str | float | int | Decimal,
    is_domestic: bool = True,
    platform_fee_percentage: str | float | int | Decimal = 0,
    fee_mode: FeeMode = FeeMode.PASS_TO_CUSTOMER,
) -> LegacyFeeCalculation:
    warnings.warn(
        "calculate_stripe_fees is deprecated, use lodgetix.fees.calculate_fees",
        DeprecationWarning,
        stacklevel=2,
    )
    amount = require_amount(subtotal)
    rates = select_rates(is_domestic)
    platform_fee = amount * require_amount(platform_fee_percentage)

    if FeeMode(fee_mode) == FeeMode.PASS_TO_CUSTOMER:
        total = gross_up(amount, rates)
        stripe_fee = total - amount
    else:
        stripe_fee = amount * rates.percentage + rates.fixed
        total = amount

    return LegacyFeeCalculation(
        subtotal=quantize_amount(amount),
        stripe_fee=quantize_amount(stripe_fee),
        platform_fee=quantize_amount(platform_fee),
        total=quantize_amount(total),
    )


def format_legacy_breakdown(calculation: LegacyFeeCalculation) -> list[str]:
    return [
        f"Subtotal: {format_amount(calculation.subtotal)}",
        f"Processing Fee: {format_amount(calculation.stripe_fee)}",
        f"Total: {format_amount(calculation.total)}",
    ]


def get_legacy_fee_explanation(fee_mode: FeeMode = FeeMode.PASS_TO_CUSTOMER) -> str:
    if FeeMode(fee_mode) == FeeMode.PASS_TO_CUSTOMER:
        return (
            "Payment processing fees are added to ensure event organizers "
            "receive the full ticket price."
        )
    return (
        "The ticket price shown is the final amount you'll pay. "
        "Processing fees are covered by the event organizer."
    )
