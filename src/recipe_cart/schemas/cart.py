"""Schemas for saved carts and shared-cart access."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Final

from pydantic import Field, field_validator

from recipe_cart.schemas.base import APIRequest, APIResponse
from recipe_cart.schemas.shopping import ShoppingListResponse


# ASCII digits only; \d would also match other Unicode digits
CHECKED_ITEM_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]+-[0-9]+")
MAX_CHECKED_ITEMS: Final[int] = 1000

CheckedItemKey = Annotated[
    str, Field(pattern=rf"^{CHECKED_ITEM_PATTERN.pattern}$")
]


def parse_checked_item(key: str) -> tuple[int, int] | None:
    """Split ``"s-i"`` into its indices, or None if the key is malformed."""
    if not CHECKED_ITEM_PATTERN.fullmatch(key):
        return None
    section_index, ingredient_index = key.split("-")
    return int(section_index), int(ingredient_index)


def canonical_checked_items(items: list[str]) -> list[str]:
    """Rewrite keys as ``"s-i"`` without leading zeros and drop repeats.

    Malformed keys are skipped. First occurrence order is kept.
    """
    result: dict[str, None] = {}
    for key in items:
        parsed = parse_checked_item(key)
        if parsed is not None:
            result[f"{parsed[0]}-{parsed[1]}"] = None
    return list(result)


class _CheckedItemsMixin(APIRequest):
    """Validates a ``checkedItems`` payload."""

    checked_items: list[CheckedItemKey] = Field(
        default_factory=list,
        max_length=MAX_CHECKED_ITEMS,
        description='Checked "sectionIndex-ingredientIndex" keys',
        examples=[["0-0", "1-2"]],
    )

    @field_validator("checked_items")
    @classmethod
    def _canonicalize(cls, value: list[str]) -> list[str]:
        return canonical_checked_items(value)


class SaveCartRequest(_CheckedItemsMixin):
    """Request body for saving (replacing) the caller's cart."""

    recipe_ids: list[str] = Field(..., description="Recipes the list was built from")
    shopping_list: ShoppingListResponse = Field(
        ..., description="Shopping list snapshot to store"
    )


class UpdateCheckedItemsRequest(_CheckedItemsMixin):
    """Request body replacing the checked-item set of a cart."""

    checked_items: list[CheckedItemKey] = Field(
        ...,
        max_length=MAX_CHECKED_ITEMS,
        description='Checked "sectionIndex-ingredientIndex" keys',
    )


class CartResponse(APIResponse):
    """The caller's saved cart."""

    id: str
    user_id: str
    recipe_ids: list[str]
    shopping_list: ShoppingListResponse
    checked_items: list[str]
    share_token: str | None = None
    created_at: datetime
    updated_at: datetime


class ShareCartResponse(APIResponse):
    """Share token and the public link built from it."""

    share_token: str
    share_url: str


class SharedCartResponse(APIResponse):
    """A cart as seen through its share link."""

    shopping_list: ShoppingListResponse
    checked_items: list[str]
    owner_name: str | None = None
    share_token: str
