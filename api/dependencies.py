"""
FastAPI Dependencies.

Provides dependency injection for the order service and its collaborators.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.retry import RetryPolicy
from core.application.services.order_service import OrderApplicationService
from core.data.repositories import SqlAlchemyOrderRepository
from core.domain.repositories import OrderRepository
from core.domain.services import PricingEngine
from core.infrastructure.adapters.persistence import InMemoryOrderRepository
from core.infrastructure.database.config import create_engine, get_session_factory, init_database
from core.infrastructure.event_bus import get_event_bus, reset_event_bus
from core.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_engine = None
_order_repository: Optional[OrderRepository] = None
_order_service: Optional[OrderApplicationService] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_order_repository() -> OrderRepository:
    global _engine, _order_repository
    if _order_repository is None:
        settings = get_app_settings()
        if settings.orders.storage_backend == "sql":
            _engine = create_engine(settings.database)
            _order_repository = SqlAlchemyOrderRepository(get_session_factory(_engine))
            logger.info("Created SqlAlchemyOrderRepository instance")
        else:
            _order_repository = InMemoryOrderRepository()
            logger.info("Created InMemoryOrderRepository instance")
    return _order_repository


def build_order_service(
    repository: OrderRepository,
    settings: Optional[AppSettings] = None,
    event_bus=None,
) -> OrderApplicationService:
    """Wire an OrderApplicationService from settings."""
    settings = settings or get_app_settings()
    return OrderApplicationService(
        repository=repository,
        pricing_engine=PricingEngine(
            tax_rate=settings.pricing.tax_rate,
            flat_shipping=settings.pricing.flat_shipping,
            free_shipping_threshold=settings.pricing.free_shipping_threshold,
        ),
        event_bus=event_bus,
        retry_policy=RetryPolicy(
            max_attempts=settings.orders.max_save_attempts,
            backoff_seconds=settings.orders.retry_backoff_seconds,
        ),
    )


def get_order_service() -> OrderApplicationService:
    global _order_service
    if _order_service is None:
        _order_service = build_order_service(
            repository=get_order_repository(),
            event_bus=get_event_bus(history_size=get_app_settings().orders.event_history_size),
        )
        logger.info("Created OrderApplicationService instance")
    return _order_service


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _engine, _order_repository, _order_service

    _engine = None
    _order_repository = None
    _order_service = None
    reset_event_bus()

    logger.info("Dependencies reset")


async def init_storage() -> None:
    """Create the schema when the SQL backend is configured."""
    get_order_repository()
    if _engine is not None:
        await init_database(_engine)


async def close_storage() -> None:
    if _engine is not None:
        await _engine.dispose()
