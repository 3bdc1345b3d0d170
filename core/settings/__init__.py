# Settings package
from core.settings.modules import (
    AppSettings,
    DatabaseSettings,
    OrderServiceSettings,
    PricingSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "DatabaseSettings",
    "OrderServiceSettings",
    "PricingSettings",
]
