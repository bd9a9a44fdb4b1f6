"""Unit tests for PostgresCartRepository."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

import recipe_cart.database.connection as db_module
from recipe_cart.database.repositories import PostgresCartRepository
from recipe_cart.schemas.shopping import ShoppingListResponse
from recipe_cart.services.cart import Cart


pytestmark = pytest.mark.unit

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _row(shopping_list: ShoppingListResponse, **overrides: Any) -> dict[str, Any]:
    row: dict[str, Any] = {
        "id": "cart-1",
        "owner_id": "user-1",
        "owner_name": "Ada",
        "recipe_ids": ["r1"],
        "shopping_list": shopping_list.model_dump(mode="json"),
        "checked_items": ["0-0"],
        "share_token": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.fixture
def repository(mock_pool: MagicMock) -> PostgresCartRepository:
    return PostgresCartRepository(mock_pool, schema="carts")


class TestRead:
    """Tests for get() and get_by_share_token()."""

    async def test_get_maps_row(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should convert the JSONB row into a Cart."""
        mock_conn.fetchrow.return_value = _row(shopping_list)

        cart = await repository.get("user-1")

        assert cart is not None
        assert cart.owner_id == "user-1"
        assert cart.shopping_list == shopping_list
        assert cart.checked_items == ["0-0"]
        query, owner_id = mock_conn.fetchrow.await_args.args
        assert "FROM carts.shopping_carts" in query
        assert owner_id == "user-1"

    async def test_get_missing(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
    ) -> None:
        """Should return None when no row matches."""
        mock_conn.fetchrow.return_value = None

        assert await repository.get("nobody") is None

    async def test_get_by_share_token(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should look the cart up by its token."""
        mock_conn.fetchrow.return_value = _row(shopping_list, share_token="tok")

        cart = await repository.get_by_share_token("tok")

        assert cart is not None
        assert cart.share_token == "tok"
        assert "WHERE share_token = $1" in mock_conn.fetchrow.await_args.args[0]


class TestWrite:
    """Tests for mutating statements."""

    async def test_replace_upserts_on_owner(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should upsert by owner and return the stored row."""
        mock_conn.fetchrow.return_value = _row(shopping_list)
        cart = Cart(
            id="cart-1",
            owner_id="user-1",
            owner_name="Ada",
            recipe_ids=["r1"],
            shopping_list=shopping_list,
            checked_items=["0-0"],
            created_at=NOW,
            updated_at=NOW,
        )

        saved = await repository.replace(cart)

        assert saved == cart
        args = mock_conn.fetchrow.await_args.args
        assert "ON CONFLICT (owner_id) DO UPDATE" in args[0]
        assert args[5] == shopping_list.model_dump(mode="json")

    async def test_replace_without_row_raises(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should fail loudly if the upsert returns nothing."""
        mock_conn.fetchrow.return_value = None
        cart = Cart(
            id="cart-1",
            owner_id="user-1",
            recipe_ids=[],
            shopping_list=shopping_list,
            checked_items=[],
            created_at=NOW,
            updated_at=NOW,
        )

        with pytest.raises(RuntimeError):
            await repository.replace(cart)

    async def test_update_checked_items_scoped_to_token(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should pass the token so the update only hits a still-shared cart."""
        mock_conn.fetchrow.return_value = _row(
            shopping_list, checked_items=["1-0"], share_token="tok"
        )

        cart = await repository.update_checked_items(
            "user-1", ["1-0"], NOW, share_token="tok"
        )

        assert cart is not None
        assert cart.checked_items == ["1-0"]
        assert mock_conn.fetchrow.await_args.args[1:] == (
            "user-1",
            ["1-0"],
            NOW,
            "tok",
        )

    async def test_claim_share_token_keeps_existing(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should only set a token when none is present."""
        mock_conn.fetchrow.return_value = _row(shopping_list, share_token="old")

        cart = await repository.claim_share_token("user-1", "new", NOW)

        assert cart is not None
        assert cart.share_token == "old"
        assert "COALESCE(share_token, $2)" in mock_conn.fetchrow.await_args.args[0]

    @pytest.mark.parametrize(
        ("status", "expected"),
        [("UPDATE 1", True), ("UPDATE 0", False)],
    )
    async def test_clear_share_token(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        status: str,
        expected: bool,
    ) -> None:
        """Should report whether a token was cleared."""
        mock_conn.execute.return_value = status

        assert await repository.clear_share_token("user-1", NOW) is expected

    @pytest.mark.parametrize(
        ("status", "expected"),
        [("DELETE 1", True), ("DELETE 0", False)],
    )
    async def test_delete(
        self,
        repository: PostgresCartRepository,
        mock_conn: AsyncMock,
        status: str,
        expected: bool,
    ) -> None:
        """Should report whether a row was deleted."""
        mock_conn.execute.return_value = status

        assert await repository.delete("user-1") is expected


class TestPoolResolution:
    """Tests for pool selection."""

    def test_uses_global_pool(self, mock_pool: MagicMock) -> None:
        """Should fall back to the global pool."""
        db_module._pool = mock_pool

        assert PostgresCartRepository().pool is mock_pool

    def test_backend_name(self, repository: PostgresCartRepository) -> None:
        assert repository.backend_name == "postgres"

    def test_rejects_bad_schema(self, mock_pool: MagicMock) -> None:
        """Should validate the schema at construction."""
        with pytest.raises(ValueError, match="Invalid database schema name"):
            PostgresCartRepository(mock_pool, schema="x; drop")
