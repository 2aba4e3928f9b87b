from decimal import ROUND_HALF_UP, Decimal

import pytest

from lodgetix.config import FeeSettings
from lodgetix.fees import (
    calculate_absorbed_fee,
    calculate_fees,
    calculate_fees_with_geolocation,
    calculate_platform_fee,
    gross_up,
)
from lodgetix.rates import FeeRate


def test_domestic_uncapped_platform_fee():
    calc = calculate_fees(500, is_domestic=True)
    assert calc.connected_amount == Decimal("500.00")
    assert calc.platform_fee == Decimal("10.00")
    assert calc.stripe_fee == Decimal("9.13")
    assert calc.customer_payment == Decimal("519.13")
    assert calc.processing_fees_display == Decimal("19.13")
    assert calc.is_domestic


def test_domestic_platform_fee_capped():
    calc = calculate_fees(2300, is_domestic=True)
    assert calc.platform_fee == Decimal("20.00")
    assert calc.customer_payment == Decimal("2360.43")
    assert calc.stripe_fee == Decimal("40.43")


def test_international_platform_fee_capped():
    calc = calculate_fees(2300, is_domestic=False)
    assert calc.platform_fee == Decimal("20.00")
    assert calc.customer_payment == Decimal("2404.46")
    assert calc.stripe_fee == Decimal("84.46")
    assert not calc.is_domestic


def test_free_order_charges_grossed_up_fixed_fee():
    calc = calculate_fees(0, is_domestic=True)
    assert calc.platform_fee == Decimal("0.00")
    assert calc.customer_payment == Decimal("0.31")
    assert calc.stripe_fee == calc.customer_payment
    assert calc.processing_fees_display == Decimal("0.31")


def test_aliases():
    calc = calculate_fees("500", is_domestic=True)
    assert calc.subtotal == calc.connected_amount
    assert calc.total == calc.customer_payment


def test_breakdown_records_resolved_values():
    calc = calculate_fees(500, is_domestic=False)
    assert calc.breakdown.platform_fee_percentage == Decimal("0.02")
    assert calc.breakdown.platform_fee_cap == Decimal("20")
    assert calc.breakdown.stripe_percentage == Decimal("0.035")
    assert calc.breakdown.stripe_fixed == Decimal("0.30")


def test_overrides_replace_configuration():
    calc = calculate_fees(500, is_domestic=True, platform_fee_percentage="0.05", platform_fee_cap=100)
    assert calc.platform_fee == Decimal("25.00")
    assert calc.customer_payment == Decimal("534.38")
    assert calc.breakdown.platform_fee_cap == Decimal("100")


def test_environment_configuration_is_used(monkeypatch):
    monkeypatch.setenv("STRIPE_PLATFORM_FEE_CAP", "100")
    calc = calculate_fees(2300, is_domestic=True)
    assert calc.platform_fee == Decimal("46.00")


def test_injected_settings():
    settings = FeeSettings(STRIPE_PLATFORM_FEE_PERCENTAGE="0", STRIPE_PLATFORM_FEE_CAP="20")
    calc = calculate_fees(100, is_domestic=True, settings=settings)
    assert calc.platform_fee == Decimal("0.00")
    assert calc.customer_payment == Decimal("102.03")


def test_minimum_platform_fee():
    settings = FeeSettings(STRIPE_PLATFORM_FEE_MINIMUM="1")
    assert calculate_fees(10, True, settings=settings).platform_fee == Decimal("1.00")
    assert calculate_fees(0, True, settings=settings).platform_fee == Decimal("0.00")
    assert calculate_fees(2300, True, settings=settings).platform_fee == Decimal("20.00")


def test_calculate_platform_fee_never_exceeds_cap():
    fee = calculate_platform_fee(Decimal("10"), Decimal("0.02"), Decimal("20"), Decimal("50"))
    assert fee == Decimal("20")


@pytest.mark.parametrize("subtotal", [-1, "-0.01", float("nan"), float("inf"), "abc", None])
def test_invalid_subtotal_rejected(subtotal):
    with pytest.raises(ValueError):
        calculate_fees(subtotal, is_domestic=True)


def test_invalid_override_rejected():
    with pytest.raises(ValueError):
        calculate_fees(100, is_domestic=True, platform_fee_cap=-5)


def test_gross_up_rejects_full_percentage():
    with pytest.raises(ValueError):
        gross_up(Decimal("10"), FeeRate(Decimal("1"), Decimal("0.30"), "bad"))


def test_very_large_subtotal():
    calc = calculate_fees(Decimal("1E+15"), is_domestic=True)
    assert calc.platform_fee == Decimal("20.00")
    assert calc.connected_amount + calc.platform_fee + calc.stripe_fee - calc.customer_payment in (
        Decimal("-0.01"),
        Decimal("0.00"),
        Decimal("0.01"),
    )


@pytest.mark.parametrize("subtotal", ["0.01", "1", "49.99", "123.45", "500", "999.99"])
def test_uncapped_regime_is_exact_percentage(subtotal):
    calc = calculate_fees(subtotal, is_domestic=True)
    expected = (Decimal(subtotal) * Decimal("0.02")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    assert calc.platform_fee == expected


def test_customer_payment_is_monotonic():
    subtotals = [Decimal(n) / 4 for n in range(0, 20000, 37)]
    for is_domestic in (True, False):
        payments = [calculate_fees(s, is_domestic).customer_payment for s in subtotals]
        assert payments == sorted(payments)


def test_international_costs_more_than_domestic():
    for subtotal in (0, 10, 500, 2300):
        assert calculate_fees(subtotal, False).customer_payment >= calculate_fees(subtotal, True).customer_payment


@pytest.mark.parametrize("code", ["AU", "au", "Au"])
def test_geolocation_domestic(code):
    calc = calculate_fees_with_geolocation(1000, code)
    assert calc.is_domestic
    assert calc == calculate_fees(1000, is_domestic=True)


@pytest.mark.parametrize("code", ["US", "GB", "", None])
def test_geolocation_international(code):
    assert not calculate_fees_with_geolocation(1000, code).is_domestic


def test_geolocation_defaults_to_international():
    assert not calculate_fees_with_geolocation(1000).is_domestic


def test_absorbed_fee():
    assert calculate_absorbed_fee(100) == Decimal("2.00")
    assert calculate_absorbed_fee(100, is_domestic=False) == Decimal("3.80")


def test_fractional_cent_cap_is_never_exceeded():
    calc = calculate_fees(2300, is_domestic=True, platform_fee_cap="10.005")
    assert calc.platform_fee == Decimal("10.00")
    assert calc.platform_fee <= calc.breakdown.platform_fee_cap
    assert calc.customer_payment == Decimal("2350.25")


def test_minimum_above_fractional_cap():
    settings = FeeSettings(STRIPE_PLATFORM_FEE_MINIMUM="15", STRIPE_PLATFORM_FEE_CAP="12.345")
    assert calculate_fees(10, True, settings=settings).platform_fee == Decimal("12.34")


def test_subtotal_beyond_decimal_range_rejected():
    with pytest.raises(ValueError):
        calculate_fees(Decimal("1E+1000000"), is_domestic=True)
