from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext

CENT = Decimal("0.01")
PRECISION_MARGIN = 28


def to_decimal(value: str | float | int | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount {value!r}") from exc


def require_amount(value: str | float | int | Decimal) -> Decimal:
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValueError("Amount cannot be NaN or infinite")
    if amount < 0:
        raise ValueError("Amount cannot be negative")
    return amount


def quantize_amount(value: str | float | int | Decimal) -> Decimal:
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValueError("Amount cannot be NaN or infinite")
    with localcontext() as ctx:
        # wide enough to keep every integer digit plus cents
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value: str | float | int | Decimal) -> str:
    return f"${quantize_amount(value):.2f}"


def to_minor_units(value: str | float | int | Decimal) -> int:
    quantized = quantize_amount(value)
    with amount_context(quantized):
        return int(quantized.scaleb(2))


def amount_context(amount: Decimal):
    """Decimal context wide enough to keep cents exact for ``amount``."""
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, amount.adjusted() + PRECISION_MARGIN)
    return localcontext(ctx)
