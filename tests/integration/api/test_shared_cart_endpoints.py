"""Integration tests for public shared-cart endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from httpx import AsyncClient


pytestmark = pytest.mark.integration

OWNER_HEADERS = {"X-User-ID": "owner-1", "X-User-Name": "Ada"}
SHARED_URL = "/api/v1/cart/shared"


@pytest.fixture
async def share_token(client: AsyncClient, saved_cart: dict) -> str:  # noqa: ARG001
    response = await client.post("/api/v1/cart/share", headers=OWNER_HEADERS)
    return response.json()["shareToken"]


class TestReadSharedCart:
    """Tests for GET /cart/shared/{shareToken}."""

    async def test_read_without_authentication(
        self,
        client: AsyncClient,
        saved_cart: dict,
        share_token: str,
    ) -> None:
        """Should serve the cart to anyone holding the token."""
        response = await client.get(f"{SHARED_URL}/{share_token}")

        assert response.status_code == 200
        assert response.json() == {
            "shoppingList": saved_cart["shoppingList"],
            "checkedItems": [],
            "ownerName": "Ada",
            "shareToken": share_token,
        }

    async def test_unknown_token(self, client: AsyncClient) -> None:
        """Should answer 404 for tokens that never existed."""
        response = await client.get(f"{SHARED_URL}/not-a-real-token")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    async def test_revoked_token(self, client: AsyncClient, share_token: str) -> None:
        """Should answer 404 once the owner stops sharing."""
        await client.delete("/api/v1/cart/share", headers=OWNER_HEADERS)

        response = await client.get(f"{SHARED_URL}/{share_token}")

        assert response.status_code == 404

    async def test_deleted_cart(self, client: AsyncClient, share_token: str) -> None:
        """Should answer 404 once the owner deletes the cart."""
        await client.delete("/api/v1/cart", headers=OWNER_HEADERS)

        response = await client.get(f"{SHARED_URL}/{share_token}")

        assert response.status_code == 404


class TestUpdateSharedCart:
    """Tests for PUT /cart/shared/{shareToken}."""

    async def test_read_your_write(self, client: AsyncClient, share_token: str) -> None:
        """Should show a guest's check on the next read."""
        response = await client.put(
            f"{SHARED_URL}/{share_token}", json={"checkedItems": ["1-1"]}
        )
        assert response.status_code == 204

        shared = await client.get(f"{SHARED_URL}/{share_token}")

        assert shared.json()["checkedItems"] == ["1-1"]

    async def test_guest_check_reaches_owner(
        self, client: AsyncClient, share_token: str
    ) -> None:
        """Should write through to the owner's cart."""
        await client.put(
            f"{SHARED_URL}/{share_token}", json={"checkedItems": ["1-0", "0-0"]}
        )

        cart = await client.get("/api/v1/cart", headers=OWNER_HEADERS)

        assert cart.json()["checkedItems"] == ["1-0", "0-0"]

    async def test_owner_check_reaches_guest(
        self, client: AsyncClient, share_token: str
    ) -> None:
        """Should show the owner's checks through the link."""
        await client.patch(
            "/api/v1/cart/checked-items",
            json={"checkedItems": ["1-1"]},
            headers=OWNER_HEADERS,
        )

        shared = await client.get(f"{SHARED_URL}/{share_token}")

        assert shared.json()["checkedItems"] == ["1-1"]

    @pytest.mark.parametrize("key", ["x-y", "٠-١", "1-1\n"])
    async def test_malformed_keys(
        self, client: AsyncClient, share_token: str, key: str
    ) -> None:
        """Should answer 422 for malformed or non-ASCII keys."""
        response = await client.put(
            f"{SHARED_URL}/{share_token}", json={"checkedItems": [key]}
        )

        assert response.status_code == 422

    async def test_leading_zeros_fold_into_one_key(
        self, client: AsyncClient, share_token: str
    ) -> None:
        """Should store '01-1' as the same item as '1-1'."""
        await client.put(
            f"{SHARED_URL}/{share_token}", json={"checkedItems": ["01-1", "1-1"]}
        )

        shared = await client.get(f"{SHARED_URL}/{share_token}")

        assert shared.json()["checkedItems"] == ["1-1"]

    async def test_unknown_token(self, client: AsyncClient) -> None:
        response = await client.put(
            f"{SHARED_URL}/not-a-real-token", json={"checkedItems": ["0-0"]}
        )

        assert response.status_code == 404

    async def test_revoked_token(self, client: AsyncClient, share_token: str) -> None:
        """Should refuse updates once the owner stops sharing."""
        await client.delete("/api/v1/cart/share", headers=OWNER_HEADERS)

        response = await client.put(
            f"{SHARED_URL}/{share_token}", json={"checkedItems": ["0-0"]}
        )

        assert response.status_code == 404

    async def test_rate_limited(self, client: AsyncClient, share_token: str) -> None:
        """Should answer 429 once a client exceeds the shared-cart limit."""
        url = f"{SHARED_URL}/{share_token}"
        headers = {"X-Forwarded-For": "198.51.100.9"}

        statuses = [
            (
                await client.put(url, json={"checkedItems": []}, headers=headers)
            ).status_code
            for _ in range(21)
        ]

        assert statuses[:20] == [204] * 20
        assert statuses[20] == 429
