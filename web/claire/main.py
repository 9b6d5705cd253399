from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from claire.api.v1.router import api_v1_router
from claire.clients import close_clients
from claire.config import settings
from claire.logging_config import setup_logging
from claire.middleware.logging import RequestLoggingMiddleware
from claire.middleware.rate_limit import limiter
from claire.views.pages import router as pages_router
from claire.views.templating import STATIC_DIR

setup_logging(settings.LOG_LEVEL, json_logs=settings.json_logs)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks.

    The Q&A client is created lazily on first use and closed here on
    shutdown.

    Args:
        application: The FastAPI application instance (unused directly but
            required by the lifespan protocol).
    """
    logger.info(
        "app_starting",
        environment=settings.ENVIRONMENT,
        qa_url=settings.qa_run_url,
        qa_timeout_seconds=settings.QA_TIMEOUT_SECONDS,
    )
    yield
    await close_clients()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        A fully configured FastAPI instance with middleware, pages, static
        files and the JSON API applied.
    """
    application = FastAPI(
        title=settings.APP_TITLE,
        description="Document question answering web client",
        version="0.1.0",
        lifespan=lifespan,
    )

    Instrumentator().instrument(application).expose(application, endpoint="/metrics")

    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Middleware order matters: the last one added runs first
    application.add_middleware(SlowAPIMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    # Routers
    application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    application.include_router(api_v1_router)
    application.include_router(pages_router)

    return application


app = create_app()
