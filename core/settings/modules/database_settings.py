from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from core.settings.base import OrdersBaseSettings


class DatabaseSettings(OrdersBaseSettings):
    """
    Database configuration settings.
    Loaded from environment with prefix DB_*
    """

    database_url: str = "sqlite+aiosqlite:///./orders.db"

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DB_",
        extra="ignore",
    )
