"""Turn a fee calculation into the amounts sent to the payment gateway.

The calculator works in major currency units; conversion to integer minor
units (cents) happens here, at the gateway boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lodgetix.amounts import to_minor_units
from lodgetix.config import FeeSettings, load_settings
from lodgetix.fees import FeeCalculation
from lodgetix.validation import validate_fee_calculation

logger = logging.getLogger(__name__)


class PricingError(ValueError):
    def __init__(self, errors: list[str]):
        super().__init__("Pricing error, please retry")
        self.errors = errors


@dataclass(frozen=True)
class PaymentAmounts:
    amount: int
    application_fee_amount: int
    transfer_amount: int
    currency: str


def ensure_valid(calculation: FeeCalculation, settings: FeeSettings | None = None) -> FeeCalculation:
    result = validate_fee_calculation(calculation, settings)
    if not result.is_valid:
        for error in result.errors:
            logger.error("fee validation failed: %s", error)
        raise PricingError(result.errors)
    return calculation


def build_payment_amounts(
    calculation: FeeCalculation,
    currency: str | None = None,
    settings: FeeSettings | None = None,
) -> PaymentAmounts:
    if currency is None:
        currency = (settings or load_settings()).currency
    amount = to_minor_units(calculation.customer_payment)
    transfer_amount = to_minor_units(calculation.connected_amount)
    # amount == transfer_amount + application_fee_amount
    application_fee_amount = amount - transfer_amount
    return PaymentAmounts(
        amount=amount,
        application_fee_amount=application_fee_amount,
        transfer_amount=transfer_amount,
        currency=currency.lower(),
    )


def build_fee_metadata(calculation: FeeCalculation) -> dict[str, str]:
    breakdown = calculation.breakdown
    return {
        "subtotal": f"{calculation.connected_amount:.2f}",
        "platform_fee": f"{calculation.platform_fee:.2f}",
        "stripe_fee": f"{calculation.stripe_fee:.2f}",
        "processing_fees": f"{calculation.processing_fees_display:.2f}",
        "total_amount": f"{calculation.customer_payment:.2f}",
        "card_region": "domestic" if calculation.is_domestic else "international",
        "platform_fee_percentage": str(breakdown.platform_fee_percentage),
        "platform_fee_cap": str(breakdown.platform_fee_cap),
        "stripe_percentage": str(breakdown.stripe_percentage),
        "stripe_fixed": str(breakdown.stripe_fixed),
    }
