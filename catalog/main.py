"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import sentry_sdk
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from catalog.api.errors import register_exception_handlers
from catalog.api.middleware import RequestLoggingMiddleware
from catalog.api.routes.categories import router as categories_router
from catalog.api.routes.health import router as health_router
from catalog.api.routes.items import router as items_router
from catalog.core.config import settings
from catalog.core.events import shutdown_event_handlers, startup_event_handlers
from catalog.core.logging import configure_logging
from catalog.core.metrics import setup_metrics


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan event handler for startup and shutdown events.
    """
    if settings.SENTRY_DSN:
        sentry_logging = LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[
                FastApiIntegration(),
                sentry_logging,
            ],
            environment=settings.ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            release=f"{settings.PROJECT_NAME}@{settings.VERSION}",
        )
        logger.info("Sentry initialized")

    for handler in startup_event_handlers:
        await handler()

    yield

    for handler in shutdown_event_handlers:
        await handler()


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    configure_logging()

    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url="/api/docs" if not settings.ENVIRONMENT == "production" else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if not settings.ENVIRONMENT == "production" else None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Health", "description": "Health check and readiness endpoints"},
            {"name": "Categories", "description": "Category pages"},
            {"name": "Items", "description": "Item pages"},
        ],
    )

    register_exception_handlers(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.CORS_ORIGINS_STR == "*" else settings.CORS_ORIGINS_STR.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_middleware(RequestLoggingMiddleware)

    if settings.ENABLE_METRICS:
        setup_metrics(application)
        logger.info("Prometheus metrics enabled")

    @application.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(url="/catalog", status_code=status.HTTP_303_SEE_OTHER)

    application.include_router(health_router, prefix="/api/health", tags=["Health"])
    application.include_router(items_router, prefix="/catalog", tags=["Items"])
    application.include_router(categories_router, prefix="/catalog", tags=["Categories"])

    return application


app = create_application()
