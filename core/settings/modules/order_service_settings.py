from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from core.settings.base import OrdersBaseSettings


class OrderServiceSettings(OrdersBaseSettings):
    """
    Order service behaviour.
    Loaded from environment with prefix ORDERS_*
    """

    # Attempts for a fetch-modify-save sequence that hits a version conflict
    max_save_attempts: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = Field(default=0.0, ge=0)

    # Published events kept in memory by the event bus; older ones are dropped
    event_history_size: int = Field(default=1000, ge=0)

    # "memory" or "sql"
    storage_backend: Literal["memory", "sql"] = "memory"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ORDERS_",
        extra="ignore",
    )
