from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lodgetix.rates import DOMESTIC_RATES, INTERNATIONAL_RATES, FeeRate

logger = logging.getLogger(__name__)

DEFAULT_PLATFORM_FEE_PERCENTAGE = Decimal("0.02")
DEFAULT_PLATFORM_FEE_CAP = Decimal("20")
DEFAULT_PLATFORM_FEE_MINIMUM = Decimal("0")


class FeeSettings(BaseSettings):
    """Platform fee parameters read from the environment.

    Malformed values never fail the load: each numeric field falls back to its
    default when the raw value is not a finite, non-negative number.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    platform_fee_percentage: Decimal = Field(
        DEFAULT_PLATFORM_FEE_PERCENTAGE, alias="STRIPE_PLATFORM_FEE_PERCENTAGE"
    )
    platform_fee_cap: Decimal = Field(DEFAULT_PLATFORM_FEE_CAP, alias="STRIPE_PLATFORM_FEE_CAP")
    platform_fee_minimum: Decimal = Field(
        DEFAULT_PLATFORM_FEE_MINIMUM, alias="STRIPE_PLATFORM_FEE_MINIMUM"
    )
    currency: str = Field("aud", alias="STRIPE_CURRENCY")

    @field_validator(
        "platform_fee_percentage", "platform_fee_cap", "platform_fee_minimum", mode="before"
    )
    @classmethod
    def parse_amount_or_default(cls, value: Any, info: ValidationInfo) -> Decimal:
        default = cls.model_fields[info.field_name].default
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            logger.warning("Ignoring non-numeric %s=%r, using %s", info.field_name, value, default)
            return default
        if not parsed.is_finite() or parsed < 0:
            logger.warning("Ignoring out of range %s=%r, using %s", info.field_name, value, default)
            return default
        return parsed

    @field_validator("currency", mode="before")
    @classmethod
    def parse_currency(cls, value: Any) -> str:
        currency = str(value).strip().lower()
        return currency or "aud"


@dataclass(frozen=True)
class FeeConfiguration:
    platform_fee_percentage: Decimal
    platform_fee_cap: Decimal
    platform_fee_minimum: Decimal
    domestic_rates: FeeRate
    international_rates: FeeRate


def load_settings() -> FeeSettings:
    return FeeSettings()


def get_fee_configuration(settings: FeeSettings | None = None) -> FeeConfiguration:
    if settings is None:
        settings = load_settings()
    return FeeConfiguration(
        platform_fee_percentage=settings.platform_fee_percentage,
        platform_fee_cap=settings.platform_fee_cap,
        platform_fee_minimum=settings.platform_fee_minimum,
        domestic_rates=DOMESTIC_RATES,
        international_rates=INTERNATIONAL_RATES,
    )


def get_platform_fee_percentage(settings: FeeSettings | None = None) -> Decimal:
    return get_fee_configuration(settings).platform_fee_percentage


def get_platform_fee_cap(settings: FeeSettings | None = None) -> Decimal:
    return get_fee_configuration(settings).platform_fee_cap


def get_platform_fee_minimum(settings: FeeSettings | None = None) -> Decimal:
    return get_fee_configuration(settings).platform_fee_minimum

