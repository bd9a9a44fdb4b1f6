"""API schemas."""

from recipe_cart.schemas.cart import (
    CartResponse,
    SaveCartRequest,
    ShareCartResponse,
    SharedCartResponse,
    UpdateCheckedItemsRequest,
)
from recipe_cart.schemas.shopping import (
    MissingRecipe,
    ShoppingListRequest,
    ShoppingListResponse,
    ShoppingSection,
)


__all__ = [
    "CartResponse",
    "MissingRecipe",
    "SaveCartRequest",
    "ShareCartResponse",
    "SharedCartResponse",
    "ShoppingListRequest",
    "ShoppingListResponse",
    "ShoppingSection",
    "UpdateCheckedItemsRequest",
]
