"""Recipe Provider client used to resolve recipe ids to ingredient lists."""

from recipe_cart.services.recipes.client import RecipeProviderClient
from recipe_cart.services.recipes.exceptions import (
    RecipeProviderError,
    RecipeProviderResponseError,
    RecipeProviderTimeoutError,
    RecipeProviderUnavailableError,
)
from recipe_cart.services.recipes.schemas import RecipeIngredients


__all__ = [
    "RecipeIngredients",
    "RecipeProviderClient",
    "RecipeProviderError",
    "RecipeProviderResponseError",
    "RecipeProviderTimeoutError",
    "RecipeProviderUnavailableError",
]
