"""Unit tests for cart models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from recipe_cart.schemas.shopping import ShoppingListResponse
from recipe_cart.services.cart import Cart
from recipe_cart.services.cart.models import filter_checked_items


pytestmark = pytest.mark.unit


class TestFilterCheckedItems:
    """Tests for filter_checked_items()."""

    def test_keeps_in_range_keys(self, shopping_list: ShoppingListResponse) -> None:
        """Should keep keys that index an existing ingredient."""
        assert filter_checked_items(shopping_list, ["0-0", "0-1", "1-0"]) == [
            "0-0",
            "0-1",
            "1-0",
        ]

    def test_drops_out_of_range_keys(
        self, shopping_list: ShoppingListResponse
    ) -> None:
        """Should drop keys past the end of a section or the list."""
        assert filter_checked_items(shopping_list, ["0-2", "1-1", "2-0"]) == []

    def test_drops_malformed_keys(self, shopping_list: ShoppingListResponse) -> None:
        """Should drop keys that are not 'digits-digits'."""
        assert filter_checked_items(shopping_list, ["a-b", "0", "-1-0", "0-0"]) == [
            "0-0"
        ]

    def test_dedupes(self, shopping_list: ShoppingListResponse) -> None:
        """Should keep the first of repeated keys."""
        assert filter_checked_items(shopping_list, ["1-0", "0-0", "1-0"]) == [
            "1-0",
            "0-0",
        ]

    @pytest.mark.parametrize("key", ["0-0\n", "٠-٠", "０-０"])
    def test_drops_non_ascii_and_trailing_newline(
        self, shopping_list: ShoppingListResponse, key: str
    ) -> None:
        """Should require the whole key to be ASCII digits."""
        assert filter_checked_items(shopping_list, [key]) == []

    def test_canonicalizes_leading_zeros(
        self, shopping_list: ShoppingListResponse
    ) -> None:
        """Should fold '01-0' and '1-0' into one key."""
        assert filter_checked_items(shopping_list, ["01-0", "1-0", "00-01"]) == [
            "1-0",
            "0-1",
        ]


class TestCart:
    """Tests for the Cart model."""

    def test_visible_checked_items_hides_stale_keys(
        self, shopping_list: ShoppingListResponse
    ) -> None:
        """Should hide stored keys that no longer point into the list."""
        now = datetime.now(UTC)
        cart = Cart(
            id="c1",
            owner_id="u1",
            recipe_ids=["r1"],
            shopping_list=shopping_list,
            checked_items=["0-0", "3-3"],
            created_at=now,
            updated_at=now,
        )

        assert cart.visible_checked_items == ["0-0"]

    def test_is_frozen(self, shopping_list: ShoppingListResponse) -> None:
        """Should reject attribute assignment."""
        now = datetime.now(UTC)
        cart = Cart(
            id="c1",
            owner_id="u1",
            recipe_ids=[],
            shopping_list=shopping_list,
            checked_items=[],
            created_at=now,
            updated_at=now,
        )

        with pytest.raises(ValidationError):
            cart.share_token = "x"  # type: ignore[misc]
