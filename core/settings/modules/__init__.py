# Settings modules
from .app_settings import AppSettings, get_app_settings
from .database_settings import DatabaseSettings
from .order_service_settings import OrderServiceSettings
from .pricing_settings import PricingSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "DatabaseSettings",
    "OrderServiceSettings",
    "PricingSettings",
]
