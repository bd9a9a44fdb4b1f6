"""Cart storage and sharing."""

from recipe_cart.services.cart.exceptions import (
    CartNotFoundError,
    CartServiceError,
    SharedCartNotFoundError,
)
from recipe_cart.services.cart.models import Cart, SharedCart, ShareResult
from recipe_cart.services.cart.sharing import SharingGateway
from recipe_cart.services.cart.store import CartStore


__all__ = [
    "Cart",
    "CartNotFoundError",
    "CartServiceError",
    "CartStore",
    "ShareResult",
    "SharedCart",
    "SharedCartNotFoundError",
    "SharingGateway",
]
