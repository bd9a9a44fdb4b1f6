"""In-process cart repository for local runs and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from datetime import datetime

    from recipe_cart.services.cart.models import Cart

logger = get_logger(__name__)


class InMemoryCartRepository:
    """Dict-backed repository keyed by owner, with a token index.

    Carts are immutable models, so stored values are never mutated in
    place; each write swaps in a new object.
    """

    def __init__(self) -> None:
        self._carts: dict[str, Cart] = {}
        self._owners_by_token: dict[str, str] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def get(self, owner_id: str) -> Cart | None:
        return self._carts.get(owner_id)

    async def get_by_share_token(self, share_token: str) -> Cart | None:
        owner_id = self._owners_by_token.get(share_token)
        if owner_id is None:
            return None
        return self._carts.get(owner_id)

    async def replace(self, cart: Cart) -> Cart:
        self._drop_token(cart.owner_id)
        self._carts[cart.owner_id] = cart
        if cart.share_token:
            self._owners_by_token[cart.share_token] = cart.owner_id
        return cart

    async def update_checked_items(
        self,
        owner_id: str,
        checked_items: list[str],
        updated_at: datetime,
        *,
        share_token: str | None = None,
    ) -> Cart | None:
        cart = self._carts.get(owner_id)
        if cart is None:
            return None
        if share_token is not None and cart.share_token != share_token:
            return None
        updated = cart.model_copy(
            update={"checked_items": list(checked_items), "updated_at": updated_at}
        )
        self._carts[owner_id] = updated
        return updated

    async def claim_share_token(
        self,
        owner_id: str,
        share_token: str,
        updated_at: datetime,
    ) -> Cart | None:
        cart = self._carts.get(owner_id)
        if cart is None or cart.share_token:
            return cart
        updated = cart.model_copy(
            update={"share_token": share_token, "updated_at": updated_at}
        )
        self._carts[owner_id] = updated
        self._owners_by_token[share_token] = owner_id
        return updated

    async def clear_share_token(self, owner_id: str, updated_at: datetime) -> bool:
        cart = self._carts.get(owner_id)
        if cart is None or not cart.share_token:
            return False
        self._drop_token(owner_id)
        self._carts[owner_id] = cart.model_copy(
            update={"share_token": None, "updated_at": updated_at}
        )
        return True

    async def delete(self, owner_id: str) -> bool:
        self._drop_token(owner_id)
        return self._carts.pop(owner_id, None) is not None

    def _drop_token(self, owner_id: str) -> None:
        cart = self._carts.get(owner_id)
        if cart is not None and cart.share_token:
            self._owners_by_token.pop(cart.share_token, None)
