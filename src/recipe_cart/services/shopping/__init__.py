"""Shopping-list aggregation: normalizer, section classifier and aggregator."""

from recipe_cart.services.shopping.classifier import classify
from recipe_cart.services.shopping.exceptions import (
    InvalidInputError,
    ShoppingServiceError,
)
from recipe_cart.services.shopping.normalizer import dedupe, normalize
from recipe_cart.services.shopping.service import ShoppingListService


__all__ = [
    "InvalidInputError",
    "ShoppingListService",
    "ShoppingServiceError",
    "classify",
    "dedupe",
    "normalize",
]
