from __future__ import annotations

from lodgetix.amounts import format_amount
from lodgetix.fees import FeeCalculation
from lodgetix.rates import is_domestic_card

__all__ = [
    "format_fee_breakdown",
    "get_fee_disclaimer",
    "get_fee_explanation",
    "get_processing_fee_label",
    "is_domestic_card",
]


def get_processing_fee_label(is_domestic: bool) -> str:
    return "Processing fees" if is_domestic else "International processing fees"


def format_fee_breakdown(calculation: FeeCalculation) -> dict[str, str]:
    return {
        "subtotal": format_amount(calculation.connected_amount),
        "processing_fees": format_amount(calculation.processing_fees_display),
        "total": format_amount(calculation.customer_payment),
        "fee_type": get_processing_fee_label(calculation.is_domestic),
    }


def get_fee_explanation(calculation: FeeCalculation) -> str:
    region = "domestic" if calculation.is_domestic else "international"
    return (
        f"Processing fees include a platform fee ({format_amount(calculation.platform_fee)}) "
        f"and {region} Stripe fees ({format_amount(calculation.stripe_fee)}). "
        "This ensures the event organizer receives the full ticket price."
    )


def get_fee_disclaimer() -> str:
    return (
        "Processing fees are added to cover payment processing costs. "
        "This ensures the full amount goes to the event organizer."
    )
