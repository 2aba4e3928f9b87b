from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class FeeRate:
    percentage: Decimal
    fixed: Decimal
    description: str


# Stripe pricing for Australian accounts
DOMESTIC_RATES = FeeRate(
    percentage=Decimal("0.017"),
    fixed=Decimal("0.30"),
    description="1.7% + $0.30 AUD",
)

INTERNATIONAL_RATES = FeeRate(
    percentage=Decimal("0.035"),
    fixed=Decimal("0.30"),
    description="3.5% + $0.30 AUD",
)

DOMESTIC_COUNTRY = "AU"


def is_domestic_card(country_code: str | None = None) -> bool:
    # unknown location is charged at the international rate
    if not country_code:
        return False
    return country_code.strip().upper() == DOMESTIC_COUNTRY


def select_rates(is_domestic: bool) -> FeeRate:
    return DOMESTIC_RATES if is_domestic else INTERNATIONAL_RATES
