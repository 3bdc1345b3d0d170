from __future__ import annotations

from decimal import Decimal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from core.settings.base import OrdersBaseSettings


class PricingSettings(OrdersBaseSettings):
    """
    Pricing rules.
    Loaded from environment with prefix PRICING_*
    """

    tax_rate: Decimal = Field(default=Decimal("0.08"), ge=0, le=1)
    flat_shipping: Decimal = Field(default=Decimal("9.99"), ge=0)
    free_shipping_threshold: Decimal = Field(default=Decimal("100.00"), ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PRICING_",
        extra="ignore",
    )
