"""FastAPI dependencies for service access.

Services are created during application startup and stored in
``app.state``; these dependencies fetch them for route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from recipe_cart.core.config import get_settings
from recipe_cart.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from recipe_cart.core.config import Settings
    from recipe_cart.services.cart import CartStore, SharingGateway
    from recipe_cart.services.shopping import ShoppingListService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_cart_store(request: Request) -> CartStore:
    """Get the cart store from app state.

    Raises:
        ServiceUnavailableException: 503 if the store is not initialized.
    """
    store: CartStore | None = getattr(request.app.state, "cart_store", None)
    if store is None:
        raise ServiceUnavailableException("Cart storage not available")
    return store


async def get_sharing_gateway(request: Request) -> SharingGateway:
    """Get the sharing gateway from app state.

    Raises:
        ServiceUnavailableException: 503 if the gateway is not initialized.
    """
    gateway: SharingGateway | None = getattr(request.app.state, "sharing_gateway", None)
    if gateway is None:
        raise ServiceUnavailableException("Cart sharing not available")
    return gateway


async def get_shopping_list_service(request: Request) -> ShoppingListService:
    """Get the shopping list service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: ShoppingListService | None = getattr(
        request.app.state, "shopping_list_service", None
    )
    if service is None:
        raise ServiceUnavailableException("Shopping list generation not available")
    return service
