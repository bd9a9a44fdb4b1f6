"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up the middleware stack in the correct order
- Registers exception handlers and rate limiting
- Mounts API routers
- Configures Prometheus metrics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from recipe_cart.api.v1.router import router as v1_router
from recipe_cart.cache.rate_limit import setup_rate_limiting
from recipe_cart.core.config import Settings, get_settings
from recipe_cart.core.events import lifespan
from recipe_cart.core.exceptions import setup_exception_handlers
from recipe_cart.core.middleware import LoggingMiddleware, RequestContextMiddleware
from recipe_cart.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_development or settings.app.debug
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Shopping list aggregation and cart sharing API",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Lifespan and dependencies read settings from here
    app.state.settings = settings

    setup_rate_limiting(app)
    setup_exception_handlers(app)
    _setup_middleware(app, settings)

    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # After routes are mounted
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware runs in reverse order of addition. From the request's
    perspective:
    1. RequestContextMiddleware (request ID, timing)
    2. LoggingMiddleware (logs requests/responses)
    3. GZipMiddleware (compresses responses)
    4. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.api.cors_origins],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    prefix = settings.api.v1_prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
            "/favicon.ico",
        },
    )

    app.add_middleware(RequestContextMiddleware)
