"""Application lifespan event handlers.

Startup builds the services the routes depend on and stores them on
``app.state``; shutdown releases them in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_cart.auth.providers import initialize_auth_provider, shutdown_auth_provider
from recipe_cart.core.config import CartStoreBackend, Settings, get_settings
from recipe_cart.database.connection import (
    close_database_pool,
    ensure_schema,
    init_database_pool,
)
from recipe_cart.database.repositories import (
    InMemoryCartRepository,
    PostgresCartRepository,
)
from recipe_cart.observability.logging import get_logger, setup_logging
from recipe_cart.services.cart import CartStore, SharingGateway
from recipe_cart.services.recipes import RecipeProviderClient
from recipe_cart.services.shopping import ShoppingListService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_cart.database.repositories import CartRepository

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        cart_store=settings.cart.store,
    )

    # Auth is critical - don't continue without it
    await initialize_auth_provider(settings)

    repository = await _init_cart_repository(settings)
    store = CartStore(repository)
    app.state.cart_store = store
    app.state.sharing_gateway = SharingGateway(
        store, token_bytes=settings.cart.share_token_bytes
    )

    await _init_shopping_list_service(app, settings)

    logger.info("Application startup complete")


async def _init_cart_repository(settings: Settings) -> CartRepository:
    """Create the configured cart repository (database failures are fatal)."""
    if settings.cart_store_enum == CartStoreBackend.MEMORY:
        logger.warning("Using in-memory cart store - carts are lost on restart")
        return InMemoryCartRepository()

    pool = await init_database_pool(settings)
    if settings.database.create_schema:
        await ensure_schema(pool, settings.database.db_schema)
    return PostgresCartRepository(pool, schema=settings.database.db_schema)


async def _init_shopping_list_service(app: FastAPI, settings: Settings) -> None:
    """Create the Recipe Provider client; list generation is optional."""
    app.state.recipe_client = None
    app.state.shopping_list_service = None

    if not settings.downstream_services.recipe_provider.url:
        logger.warning("Recipe Provider URL not set - list generation unavailable")
        return

    try:
        client = RecipeProviderClient(settings)
        await client.initialize()
    except Exception:
        logger.exception(
            "Failed to initialize RecipeProviderClient - list generation unavailable"
        )
        return

    app.state.recipe_client = client
    app.state.shopping_list_service = ShoppingListService(client)


async def _shutdown(app: FastAPI) -> None:
    """Release application resources."""
    logger.info("Shutting down application")

    client: RecipeProviderClient | None = getattr(app.state, "recipe_client", None)
    if client is not None:
        await client.shutdown()
        app.state.recipe_client = None

    app.state.shopping_list_service = None
    app.state.sharing_gateway = None
    app.state.cart_store = None

    await close_database_pool()
    await shutdown_auth_provider()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Uses the settings the app was created with, falling back to the
    cached environment settings.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
