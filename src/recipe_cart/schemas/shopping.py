"""Schemas for aggregated shopping lists."""

from __future__ import annotations

from pydantic import Field

from recipe_cart.schemas.base import APIRequest, APIResponse


class ShoppingSection(APIResponse):
    """A named supermarket section and its deduplicated ingredients."""

    name: str = Field(..., description="Section name, unique within one list")
    ingredients: list[str] = Field(
        default_factory=list,
        description="Ingredient display text, first-seen wording kept",
    )


class MissingRecipe(APIResponse):
    """A requested recipe that contributed no ingredients."""

    id: str = Field(..., description="Recipe identifier")
    dish_name: str = Field(..., description="Recipe display name")


class ShoppingListResponse(APIResponse):
    """Shopping list aggregated from a set of recipes.

    ``recipes_with_ingredients + len(missing_recipes) == total_recipes``.
    """

    sections: list[ShoppingSection] = Field(default_factory=list)
    missing_recipes: list[MissingRecipe] = Field(default_factory=list)
    total_recipes: int = Field(..., ge=0)
    recipes_with_ingredients: int = Field(..., ge=0)


class ShoppingListRequest(APIRequest):
    """Request body for generating a shopping list."""

    recipe_ids: list[str] = Field(
        ...,
        description="Recipe identifiers; duplicates are ignored",
        examples=[["r1", "r2"]],
    )
