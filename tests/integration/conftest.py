"""Pytest configuration and fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import build_order_service, get_order_repository, get_order_service
from api.main import app
from core.infrastructure.adapters.persistence import InMemoryOrderRepository
from core.infrastructure.event_bus import InMemoryEventBus


@pytest.fixture
def api_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def api_event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def test_client(api_repository, api_event_bus) -> TestClient:
    """Create FastAPI test client backed by a fresh in-memory repository."""
    service = build_order_service(api_repository, event_bus=api_event_bus)

    # Override dependencies
    app.dependency_overrides[get_order_service] = lambda: service
    app.dependency_overrides[get_order_repository] = lambda: api_repository

    client = TestClient(app)
    yield client

    # Cleanup
    app.dependency_overrides.clear()
