"""Fee calculation for card payments made to event organisers.

The organiser's connected account must net exactly the subtotal. A platform
fee (a percentage of the subtotal, capped) is added on top, and the whole
amount is grossed up so that Stripe's ``percentage * total + fixed`` fee is
covered by the customer:

    total = (subtotal + platform_fee + fixed) / (1 - percentage)

Values are kept at full precision and only rounded to cents when the result
is built.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal

from lodgetix.amounts import CENT, amount_context, quantize_amount, require_amount
from lodgetix.config import FeeSettings, get_fee_configuration
from lodgetix.rates import FeeRate, is_domestic_card, select_rates

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")


@dataclass(frozen=True)
class FeeBreakdown:
    platform_fee_percentage: Decimal
    platform_fee_cap: Decimal
    platform_fee_minimum: Decimal
    stripe_percentage: Decimal
    stripe_fixed: Decimal


@dataclass(frozen=True)
class FeeCalculation:
    connected_amount: Decimal
    platform_fee: Decimal
    stripe_fee: Decimal
    customer_payment: Decimal
    processing_fees_display: Decimal
    is_domestic: bool
    breakdown: FeeBreakdown

    @property
    def subtotal(self) -> Decimal:
        return self.connected_amount

    @property
    def total(self) -> Decimal:
        return self.customer_payment


def calculate_platform_fee(
    amount: Decimal,
    percentage: Decimal,
    cap: Decimal,
    minimum: Decimal = ZERO,
) -> Decimal:
    """Return the unrounded platform fee for ``amount``.

    The minimum only applies to paid orders and never lifts the fee past the cap.
    """
    if amount <= 0:
        return ZERO
    fee = max(amount * percentage, minimum)
    return min(fee, cap)


def gross_up(base: Decimal, rates: FeeRate) -> Decimal:
    denominator = ONE - rates.percentage
    if denominator <= 0:
        raise ValueError(f"Processing percentage {rates.percentage} must be below 1")
    return (base + rates.fixed) / denominator


def calculate_fees(
    subtotal: str | float | int | Decimal,
    is_domestic: bool,
    platform_fee_percentage: str | float | int | Decimal | None = None,
    platform_fee_cap: str | float | int | Decimal | None = None,
    settings: FeeSettings | None = None,
) -> FeeCalculation:
    amount = require_amount(subtotal)
    config = get_fee_configuration(settings)
    percentage = (
        config.platform_fee_percentage
        if platform_fee_percentage is None
        else require_amount(platform_fee_percentage)
    )
    cap = config.platform_fee_cap if platform_fee_cap is None else require_amount(platform_fee_cap)
    minimum = config.platform_fee_minimum
    rates = select_rates(is_domestic)

    try:
        with amount_context(amount):
            platform_fee = calculate_platform_fee(amount, percentage, cap, minimum)
            if quantize_amount(platform_fee) > cap:
                # a cap with fractions of a cent must not round up past itself
                platform_fee = cap.quantize(CENT, rounding=ROUND_DOWN)
            base = amount + platform_fee
            customer_payment = gross_up(base, rates)
            stripe_fee = customer_payment - base

            connected_amount = quantize_amount(amount)
            rounded_payment = quantize_amount(customer_payment)
            processing_fees_display = rounded_payment - connected_amount
    except ArithmeticError as exc:
        raise ValueError(f"Amount {subtotal!r} is out of range") from exc
    logger.debug(
        "Fees for %s (%s): platform=%s stripe=%s total=%s",
        amount,
        "domestic" if is_domestic else "international",
        platform_fee,
        stripe_fee,
        customer_payment,
    )
    return FeeCalculation(
        connected_amount=connected_amount,
        platform_fee=quantize_amount(platform_fee),
        stripe_fee=quantize_amount(stripe_fee),
        customer_payment=rounded_payment,
        processing_fees_display=processing_fees_display,
        is_domestic=is_domestic,
        breakdown=FeeBreakdown(
            platform_fee_percentage=percentage,
            platform_fee_cap=cap,
            platform_fee_minimum=minimum,
            stripe_percentage=rates.percentage,
            stripe_fixed=rates.fixed,
        ),
    )


def calculate_fees_with_geolocation(
    subtotal: str | float | int | Decimal,
    country_code: str | None = None,
    settings: FeeSettings | None = None,
) -> FeeCalculation:
    return calculate_fees(subtotal, is_domestic_card(country_code), settings=settings)


def calculate_absorbed_fee(amount: str | float | int | Decimal, is_domestic: bool = True) -> Decimal:
    """Processing fee taken from the organiser when fees are not passed on."""
    rates = select_rates(is_domestic)
    return quantize_amount(require_amount(amount) * rates.percentage + rates.fixed)
