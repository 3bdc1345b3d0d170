"""
Order Service - Main FastAPI Application.

REST API layer exposing order creation, pricing, status transitions
and delivery estimates.
"""
from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import close_storage, get_settings, init_storage
from api.routes import health, orders
from core.domain.exceptions import (
    ConcurrentModification,
    InvalidOrderInput,
    InvalidOrderState,
    InvalidTransition,
    OrderError,
    OrderNotFound,
)


# Setup logging
logging.basicConfig(
    level=get_settings().orders.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Most specific class wins; lookup walks the exception's MRO
ERROR_STATUS_CODES = {
    InvalidOrderInput: 400,
    OrderNotFound: 404,
    InvalidTransition: 409,
    InvalidOrderState: 409,
    ConcurrentModification: 409,
    OrderError: 400,
}


def status_code_for(exc: OrderError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


# =============================================================================
# LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Order service API starting up...")
    await init_storage()
    logger.info("Swagger UI available at: /docs")
    yield
    await close_storage()
    logger.info("Order service API shutting down...")


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Order Service API",
    description="""
    Order management API.

    Features:
    - Order creation with line-level discounts
    - Deterministic pricing (tax, flat shipping, free-shipping threshold)
    - Lifecycle transitions with conflict detection
    - Business-day delivery estimates
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"-> {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"<- {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(OrderError)
async def order_error_handler(request: Request, exc: OrderError):
    """Translate domain errors into HTTP responses."""
    status_code = status_code_for(exc)
    logger.info(f"{type(exc).__name__} on {request.url.path}: {exc}")

    content = {
        "error": type(exc).__name__,
        "detail": str(exc),
        "path": request.url.path,
    }
    if isinstance(exc, InvalidTransition):
        content["current_status"] = exc.current.value
        content["requested_status"] = exc.requested.value

    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path
        }
    )


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    orders.router,
    prefix="/api/v1/orders",
    tags=["Orders"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Order Service API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
