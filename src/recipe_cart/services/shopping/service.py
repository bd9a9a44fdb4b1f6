"""Shopping-list aggregation service.

Merges the ingredient lists of several recipes into one deduplicated
list grouped by supermarket section. Aggregation itself is pure; the
service only reaches out to the Recipe Provider to turn ids into
ingredient lists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_cart.observability.logging import get_logger
from recipe_cart.observability.metrics import SHOPPING_LISTS_GENERATED
from recipe_cart.schemas.shopping import (
    MissingRecipe,
    ShoppingListResponse,
    ShoppingSection,
)
from recipe_cart.services.recipes.schemas import RecipeIngredients
from recipe_cart.services.shopping.classifier import classify_key
from recipe_cart.services.shopping.constants import UNKNOWN_RECIPE_NAME
from recipe_cart.services.shopping.exceptions import InvalidInputError
from recipe_cart.services.shopping.normalizer import dedupe, normalize


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_cart.services.recipes.client import RecipeProviderClient

logger = get_logger(__name__)


class ShoppingListService:
    """Builds sectioned shopping lists from recipes.

    Sections appear in order of first use and ingredients in order of
    first appearance, so the same input always yields the same list.
    """

    def __init__(self, recipe_client: RecipeProviderClient | None = None) -> None:
        self._recipe_client = recipe_client

    def generate(self, recipes: Sequence[RecipeIngredients]) -> ShoppingListResponse:
        """Aggregate already-resolved recipes into a shopping list.

        Recipes with no ingredients are reported in ``missing_recipes``.
        An ingredient whose normalized key was already seen in this run is
        dropped, so the first wording wins.
        """
        missing: list[MissingRecipe] = []
        lines: list[str] = []

        for recipe in recipes:
            recipe_lines = [line for line in recipe.ingredients if line.strip()]
            if not recipe_lines:
                missing.append(MissingRecipe(id=recipe.id, dish_name=recipe.dish_name))
                continue
            lines.extend(recipe_lines)

        sections: dict[str, list[str]] = {}
        for line in dedupe(lines):
            sections.setdefault(classify_key(normalize(line)), []).append(line)

        total = len(recipes)
        return ShoppingListResponse(
            sections=[
                ShoppingSection(name=name, ingredients=items)
                for name, items in sections.items()
            ],
            missing_recipes=missing,
            total_recipes=total,
            recipes_with_ingredients=total - len(missing),
        )

    async def generate_for_ids(
        self,
        recipe_ids: Sequence[str],
        auth_token: str | None = None,
    ) -> ShoppingListResponse:
        """Resolve recipe ids through the Recipe Provider and aggregate them.

        Duplicate ids count once. Ids the provider cannot resolve are
        reported as missing with the name ``"Unknown recipe"``. Results
        follow the request order.

        Raises:
            InvalidInputError: If no recipe ids are given.
            RecipeProviderError: If the Recipe Provider fails.
        """
        unique_ids = list(dict.fromkeys(rid.strip() for rid in recipe_ids))
        unique_ids = [rid for rid in unique_ids if rid]
        if not unique_ids:
            msg = "At least one recipe id is required"
            raise InvalidInputError(msg)

        if self._recipe_client is None:
            msg = "Recipe Provider client not configured"
            raise RuntimeError(msg)

        resolved = await self._recipe_client.resolve_recipes(unique_ids, auth_token)
        by_id: dict[str, RecipeIngredients] = {}
        for recipe in resolved:
            by_id.setdefault(recipe.id, recipe)

        ordered = [
            by_id.get(rid) or RecipeIngredients(id=rid, dish_name=UNKNOWN_RECIPE_NAME)
            for rid in unique_ids
        ]
        result = self.generate(ordered)

        SHOPPING_LISTS_GENERATED.inc()
        logger.info(
            "Shopping list generated",
            total_recipes=result.total_recipes,
            missing_recipes=len(result.missing_recipes),
            sections=len(result.sections),
        )
        return result
