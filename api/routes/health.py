"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone
import platform

from fastapi import APIRouter, Depends

from api.dependencies import get_order_repository, get_settings
from core.domain.repositories import OrderRepository
from core.settings import AppSettings


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "order-service",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check(
    repository: OrderRepository = Depends(get_order_repository),
    settings: AppSettings = Depends(get_settings),
):
    """
    Readiness check endpoint.

    Probes the configured order storage with a cheap lookup.
    """
    try:
        await repository.exists("readiness-probe")
        storage = "ok"
    except Exception as exc:
        storage = f"error: {exc}"

    return {
        "status": "ready" if storage == "ok" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "api": "ok",
            "storage": storage,
            "storage_backend": settings.orders.storage_backend,
        },
    }
