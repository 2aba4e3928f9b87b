from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from lodgetix.amounts import amount_context
from lodgetix.config import FeeSettings, get_platform_fee_cap
from lodgetix.fees import FeeCalculation, calculate_platform_fee

TOLERANCE = Decimal("0.01")

AMOUNT_FIELDS = (
    "connected_amount",
    "platform_fee",
    "stripe_fee",
    "customer_payment",
    "processing_fees_display",
)
BREAKDOWN_FIELDS = (
    "platform_fee_percentage",
    "platform_fee_cap",
    "platform_fee_minimum",
    "stripe_percentage",
    "stripe_fixed",
)


@dataclass
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def validate_fee_calculation(
    calculation: FeeCalculation, settings: FeeSettings | None = None
) -> ValidationResult:
    """Re-derive a calculation from its own parts and report every inconsistency.

    Nothing is raised here; callers decide whether to block the payment.
    """
    with amount_context(calculation.customer_payment):
        errors = consistency_errors(calculation, settings)
    return ValidationResult(is_valid=not errors, errors=errors)


def consistency_errors(calculation: FeeCalculation, settings: FeeSettings | None = None) -> list[str]:
    errors: list[str] = []
    breakdown = calculation.breakdown

    for name in AMOUNT_FIELDS:
        if not getattr(calculation, name).is_finite():
            errors.append(f"Non-finite amount in {name}")
    for name in BREAKDOWN_FIELDS:
        if not getattr(breakdown, name).is_finite():
            errors.append(f"Non-finite value in breakdown.{name}")
    if errors:
        return errors

    expected_total = calculation.connected_amount + calculation.platform_fee + calculation.stripe_fee
    if abs(expected_total - calculation.customer_payment) > TOLERANCE:
        errors.append(
            f"Total mismatch: expected {expected_total:.2f}, got {calculation.customer_payment:.2f}"
        )

    caps = [breakdown.platform_fee_cap]
    if settings is not None:
        caps.append(get_platform_fee_cap(settings))
    for cap in caps:
        if calculation.platform_fee > cap:
            errors.append(f"Platform fee {calculation.platform_fee:.2f} exceeds cap {cap:.2f}")
            break

    expected_display = calculation.customer_payment - calculation.connected_amount
    if calculation.processing_fees_display != expected_display:
        errors.append(
            "Processing fees display mismatch: "
            f"expected {expected_display:.2f}, got {calculation.processing_fees_display:.2f}"
        )

    expected_platform_fee = calculate_platform_fee(
        calculation.connected_amount,
        breakdown.platform_fee_percentage,
        breakdown.platform_fee_cap,
        breakdown.platform_fee_minimum,
    )
    if abs(expected_platform_fee - calculation.platform_fee) > TOLERANCE:
        errors.append(
            "Platform fee calculation mismatch: "
            f"expected {expected_platform_fee:.2f}, got {calculation.platform_fee:.2f}"
        )

    expected_stripe_fee = (
        calculation.customer_payment * breakdown.stripe_percentage + breakdown.stripe_fixed
    )
    if abs(expected_stripe_fee - calculation.stripe_fee) > TOLERANCE:
        errors.append(
            "Stripe fee mismatch: "
            f"expected {expected_stripe_fee:.2f}, got {calculation.stripe_fee:.2f}"
        )

    return errors
