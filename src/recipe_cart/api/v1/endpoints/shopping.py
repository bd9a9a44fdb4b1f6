"""Shopping list generation endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from recipe_cart.api.dependencies import get_shopping_list_service
from recipe_cart.auth.dependencies import CurrentUser, get_current_user
from recipe_cart.core.exceptions import BadRequestException, ServiceUnavailableException
from recipe_cart.observability.logging import get_logger
from recipe_cart.schemas.shopping import ShoppingListRequest, ShoppingListResponse
from recipe_cart.services.recipes import (
    RecipeProviderError,
    RecipeProviderUnavailableError,
)
from recipe_cart.services.shopping import InvalidInputError, ShoppingListService


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Shopping List"])


@router.post(
    "/shopping-list",
    response_model=ShoppingListResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a shopping list",
    description=(
        "Merges the ingredients of the given recipes into one deduplicated "
        "list grouped by supermarket section. Recipes that have no "
        "ingredients, or that cannot be found, are listed in missingRecipes."
    ),
    responses={
        400: {"description": "No recipe ids given"},
        503: {"description": "Recipe Provider unavailable"},
    },
)
async def generate_shopping_list(
    body: ShoppingListRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ShoppingListService, Depends(get_shopping_list_service)],
) -> ShoppingListResponse:
    """Generate a shopping list for a set of recipes."""
    try:
        return await service.generate_for_ids(body.recipe_ids, user.access_token)

    except InvalidInputError as e:
        raise BadRequestException(str(e)) from None

    except RecipeProviderUnavailableError:
        logger.warning("Recipe Provider unavailable")
        raise ServiceUnavailableException(
            "Recipe service is temporarily unavailable"
        ) from None

    except RecipeProviderError:
        logger.exception("Recipe Provider error")
        raise ServiceUnavailableException(
            "Recipe service returned an unexpected response"
        ) from None
