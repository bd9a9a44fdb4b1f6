"""Cart domain models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from recipe_cart.schemas.cart import parse_checked_item
from recipe_cart.schemas.shopping import ShoppingListResponse


class Cart(BaseModel):
    """The single active cart of an owner.

    ``shopping_list`` is a snapshot taken when the cart was saved and is
    never recomputed.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    owner_name: str | None = None
    recipe_ids: list[str]
    shopping_list: ShoppingListResponse
    checked_items: list[str]
    share_token: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def visible_checked_items(self) -> list[str]:
        """Checked keys that still point into the stored snapshot."""
        return filter_checked_items(self.shopping_list, self.checked_items)


class SharedCart(BaseModel):
    """What a share-link holder sees."""

    model_config = ConfigDict(frozen=True)

    shopping_list: ShoppingListResponse
    checked_items: list[str]
    owner_name: str | None = None
    share_token: str


class ShareResult(BaseModel):
    """Outcome of sharing a cart."""

    model_config = ConfigDict(frozen=True)

    share_token: str
    created: bool = False


def filter_checked_items(
    shopping_list: ShoppingListResponse,
    checked_items: list[str],
) -> list[str]:
    """Keep well-formed, in-range keys in canonical form, dropping duplicates.

    A key ``"s-i"`` is in range when section ``s`` exists and has an
    ingredient at index ``i``. Kept keys are rebuilt from the parsed
    indices, so ``"01-1"`` is stored as ``"1-1"``.
    """
    sizes = [len(section.ingredients) for section in shopping_list.sections]
    result: dict[str, None] = {}
    for key in checked_items:
        parsed = parse_checked_item(key)
        if parsed is None:
            continue
        section_index, ingredient_index = parsed
        if section_index < len(sizes) and ingredient_index < sizes[section_index]:
            result[f"{section_index}-{ingredient_index}"] = None
    return list(result)
