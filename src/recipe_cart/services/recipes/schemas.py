"""Schemas exchanged with the Recipe Provider."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from recipe_cart.schemas.base import DownstreamRequest, DownstreamResponse


class RecipeBatchRequest(DownstreamRequest):
    """Body of ``POST /recipes/batch``."""

    ids: list[str]


class RecipeIngredients(DownstreamResponse):
    """A recipe's id, display name and raw ingredient lines."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    dish_name: str = ""
    ingredients: list[str] = Field(default_factory=list)
