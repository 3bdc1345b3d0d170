from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.database_settings import DatabaseSettings
from core.settings.modules.order_service_settings import OrderServiceSettings
from core.settings.modules.pricing_settings import PricingSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    pricing: PricingSettings
    orders: OrderServiceSettings
    database: DatabaseSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        pricing=PricingSettings(),
        orders=OrderServiceSettings(),
        database=DatabaseSettings(),
    )
