"""Unit tests for SharingGateway."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from recipe_cart.schemas.shopping import ShoppingListResponse
from recipe_cart.services.cart import (
    CartNotFoundError,
    CartStore,
    SharedCartNotFoundError,
    SharingGateway,
)


pytestmark = pytest.mark.unit


@pytest.fixture
async def saved_cart(
    cart_store: CartStore,
    shopping_list: ShoppingListResponse,
) -> None:
    await cart_store.put("owner-1", ["r1", "r3"], shopping_list, owner_name="Ada")


class TestShare:
    """Tests for issuing and revoking share tokens."""

    @pytest.mark.usefixtures("saved_cart")
    async def test_share_is_idempotent(self, sharing_gateway: SharingGateway) -> None:
        """Should return the same token on repeated calls."""
        first = await sharing_gateway.share("owner-1")
        second = await sharing_gateway.share("owner-1")

        assert first.share_token == second.share_token
        assert first.created is True
        assert second.created is False

    @pytest.mark.usefixtures("saved_cart")
    async def test_unshare_then_share_rotates_token(
        self, sharing_gateway: SharingGateway
    ) -> None:
        """Should issue a different token after revocation."""
        first = await sharing_gateway.share("owner-1")
        await sharing_gateway.unshare("owner-1")
        second = await sharing_gateway.share("owner-1")

        assert second.share_token != first.share_token

    @pytest.mark.usefixtures("saved_cart")
    async def test_token_is_url_safe_and_long(
        self, sharing_gateway: SharingGateway
    ) -> None:
        """Should generate an unguessable, URL-safe token."""
        result = await sharing_gateway.share("owner-1")

        assert len(result.share_token) >= 32
        assert all(c.isalnum() or c in "-_" for c in result.share_token)

    async def test_share_without_cart_raises(
        self, sharing_gateway: SharingGateway
    ) -> None:
        """Should propagate CartNotFoundError for owners without a cart."""
        with pytest.raises(CartNotFoundError):
            await sharing_gateway.share("nobody")

    async def test_unshare_without_cart_is_noop(
        self, sharing_gateway: SharingGateway
    ) -> None:
        """Should not fail when nothing is shared."""
        await sharing_gateway.unshare("nobody")

    @pytest.mark.usefixtures("saved_cart")
    async def test_share_counts_new_tokens_only(
        self, sharing_gateway: SharingGateway
    ) -> None:
        """Should increment the issued-token counter once per new token."""
        with patch("recipe_cart.services.cart.sharing.SHARE_TOKENS_ISSUED") as counter:
            await sharing_gateway.share("owner-1")
            await sharing_gateway.share("owner-1")

        counter.inc.assert_called_once()


class TestReadByToken:
    """Tests for the read side of a share link."""

    @pytest.mark.usefixtures("saved_cart")
    async def test_read_returns_shared_view(
        self,
        sharing_gateway: SharingGateway,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should expose the list, checked items and owner name."""
        token = (await sharing_gateway.share("owner-1")).share_token

        shared = await sharing_gateway.read_by_token(token)

        assert shared.shopping_list == shopping_list
        assert shared.checked_items == []
        assert shared.owner_name == "Ada"
        assert shared.share_token == token

    async def test_unknown_token(self, sharing_gateway: SharingGateway) -> None:
        """Should raise SharedCartNotFoundError."""
        with pytest.raises(SharedCartNotFoundError):
            await sharing_gateway.read_by_token("not-a-token")

    @pytest.mark.usefixtures("saved_cart")
    async def test_revoked_token(self, sharing_gateway: SharingGateway) -> None:
        """Should stop resolving a token after unshare."""
        token = (await sharing_gateway.share("owner-1")).share_token
        await sharing_gateway.unshare("owner-1")

        with pytest.raises(SharedCartNotFoundError):
            await sharing_gateway.read_by_token(token)

    @pytest.mark.usefixtures("saved_cart")
    async def test_deleted_cart(
        self,
        sharing_gateway: SharingGateway,
        cart_store: CartStore,
    ) -> None:
        """Should stop resolving a token once the cart is deleted."""
        token = (await sharing_gateway.share("owner-1")).share_token
        await cart_store.delete("owner-1")

        with pytest.raises(SharedCartNotFoundError):
            await sharing_gateway.read_by_token(token)


class TestUpdateByToken:
    """Tests for the write side of a share link."""

    @pytest.mark.usefixtures("saved_cart")
    async def test_read_your_write(self, sharing_gateway: SharingGateway) -> None:
        """Should show a checked item on the very next read."""
        token = (await sharing_gateway.share("owner-1")).share_token

        await sharing_gateway.update_by_token(token, ["0-1"])
        shared = await sharing_gateway.read_by_token(token)

        assert shared.checked_items == ["0-1"]

    @pytest.mark.usefixtures("saved_cart")
    async def test_owner_sees_guest_update(
        self,
        sharing_gateway: SharingGateway,
        cart_store: CartStore,
    ) -> None:
        """Should write through to the owner's cart."""
        token = (await sharing_gateway.share("owner-1")).share_token

        await sharing_gateway.update_by_token(token, ["1-0"])

        assert (await cart_store.get("owner-1")).checked_items == ["1-0"]

    @pytest.mark.usefixtures("saved_cart")
    async def test_out_of_range_keys_dropped(
        self, sharing_gateway: SharingGateway
    ) -> None:
        """Should keep only keys that point into the list."""
        token = (await sharing_gateway.share("owner-1")).share_token

        await sharing_gateway.update_by_token(token, ["0-0", "9-9", "1-3"])
        shared = await sharing_gateway.read_by_token(token)

        assert shared.checked_items == ["0-0"]

    @pytest.mark.usefixtures("saved_cart")
    async def test_update_leaves_list_untouched(
        self,
        sharing_gateway: SharingGateway,
        shopping_list: ShoppingListResponse,
    ) -> None:
        """Should never alter the stored shopping list."""
        token = (await sharing_gateway.share("owner-1")).share_token

        await sharing_gateway.update_by_token(token, ["0-0"])
        shared = await sharing_gateway.read_by_token(token)

        assert shared.shopping_list == shopping_list

    async def test_unknown_token(self, sharing_gateway: SharingGateway) -> None:
        """Should raise SharedCartNotFoundError."""
        with pytest.raises(SharedCartNotFoundError):
            await sharing_gateway.update_by_token("not-a-token", ["0-0"])

    @pytest.mark.usefixtures("saved_cart")
    async def test_revoked_token(self, sharing_gateway: SharingGateway) -> None:
        """Should refuse updates through a revoked link."""
        token = (await sharing_gateway.share("owner-1")).share_token
        await sharing_gateway.unshare("owner-1")

        with pytest.raises(SharedCartNotFoundError):
            await sharing_gateway.update_by_token(token, ["0-0"])
