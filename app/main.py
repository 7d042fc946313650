"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.dependencies import SlidingWindowRateLimiter, check_rate_limit
from app.api.errors import register_exception_handlers
from app.api.middleware import RequestContextMiddleware
from app.api.responses import Tags
from app.api.routes.v1.analytics import router as analytics_router
from app.api.routes.v1.donations import router as donations_router
from app.api.routes.v1.endpoints.health import router as health_router
from app.core.config import settings
from app.core.events import load_dataset, shutdown_event_handlers, startup_event_handlers
from app.core.logging import configure_logging
from app.core.metrics import setup_metrics
from app.core.tracing import setup_tracing
from app.db.store import DonationDataset


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan event handler for startup and shutdown events.
    """
    for handler in startup_event_handlers:
        await handler()
    logger.info(f"{settings.SERVICE_NAME} running on port {settings.PORT}")

    yield

    for handler in shutdown_event_handlers:
        await handler()


def create_application(dataset: Optional[DonationDataset] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        dataset: Dataset to serve; loaded from settings when omitted
    """
    configure_logging()

    is_production = settings.ENVIRONMENT == "production"
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
        openapi_url=None if is_production else "/api/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": Tags.HEALTH, "description": "Health check and readiness endpoints"},
            {"name": Tags.ANALYTICS, "description": "Aggregated donation analytics"},
            {"name": Tags.DONATIONS, "description": "Donation and category listings"},
        ],
        license_info={
            "name": "MIT",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    application.state.dataset = dataset if dataset is not None else load_dataset()
    application.state.trusted_proxies = tuple(settings.TRUSTED_PROXIES)
    application.state.rate_limiter = (
        SlidingWindowRateLimiter(settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS)
        if settings.RATE_LIMIT_ENABLED
        else None
    )

    register_exception_handlers(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )
    application.add_middleware(RequestContextMiddleware)

    if settings.ENABLE_METRICS:
        setup_metrics(application)
        logger.info("Prometheus metrics enabled")

    if settings.ENABLE_TRACING:
        setup_tracing(application)
        logger.info("OpenTelemetry tracing enabled")

    rate_limited = [Depends(check_rate_limit)]
    application.include_router(health_router, prefix="/health", tags=[Tags.HEALTH])
    application.include_router(
        analytics_router,
        prefix=f"{settings.API_PREFIX}/analytics",
        tags=[Tags.ANALYTICS],
        dependencies=rate_limited,
    )
    application.include_router(
        donations_router,
        prefix=f"{settings.API_PREFIX}/donations",
        tags=[Tags.DONATIONS],
        dependencies=rate_limited,
    )

    return application


app = create_application()


def run() -> None:
    """
    Serve the application with uvicorn.
    """
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
