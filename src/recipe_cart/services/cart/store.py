"""Cart store: the single active cart of each owner.

Mutations for one owner are serialized by a per-owner ``asyncio.Lock``,
so a double-submitted save or check never interleaves with another
write for the same owner in this process. Each repository call is
additionally atomic on its own.
"""

from __future__ import annotations

import asyncio
import uuid
import weakref
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from recipe_cart.observability.logging import get_logger
from recipe_cart.observability.metrics import CARTS_SAVED
from recipe_cart.services.cart.exceptions import CartNotFoundError
from recipe_cart.services.cart.models import Cart, filter_checked_items


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Sequence

    from recipe_cart.database.repositories.protocol import CartRepository
    from recipe_cart.schemas.shopping import ShoppingListResponse

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


class CartStore:
    """Owner-keyed cart persistence with replace semantics."""

    def __init__(self, repository: CartRepository) -> None:
        self._repository = repository
        # Entries vanish once no coroutine holds or awaits the lock
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def repository(self) -> CartRepository:
        return self._repository

    @asynccontextmanager
    async def _owner_lock(self, owner_id: str) -> AsyncIterator[None]:
        lock = self._locks.get(owner_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[owner_id] = lock
        async with lock:
            yield

    async def get(self, owner_id: str) -> Cart:
        """Return the owner's cart.

        Raises:
            CartNotFoundError: If the owner has no cart.
        """
        cart = await self._repository.get(owner_id)
        if cart is None:
            raise CartNotFoundError(owner_id)
        return cart

    async def get_by_share_token(self, share_token: str) -> Cart | None:
        """Return the cart shared under ``share_token``, if any."""
        return await self._repository.get_by_share_token(share_token)

    async def put(
        self,
        owner_id: str,
        recipe_ids: Sequence[str],
        shopping_list: ShoppingListResponse,
        checked_items: Sequence[str] = (),
        *,
        owner_name: str | None = None,
        share_token: str | None = None,
        keep_share_token: bool = False,
    ) -> Cart:
        """Replace the owner's cart in full.

        The new cart gets a fresh id and creation time. Its share token is
        None unless one is passed explicitly, or ``keep_share_token`` carries
        over the token of the cart being replaced. Checked keys that do not
        point into ``shopping_list`` are dropped.
        """
        async with self._owner_lock(owner_id):
            if keep_share_token and share_token is None:
                previous = await self._repository.get(owner_id)
                share_token = previous.share_token if previous else None

            now = _now()
            cart = Cart(
                id=str(uuid.uuid4()),
                owner_id=owner_id,
                owner_name=owner_name,
                recipe_ids=list(dict.fromkeys(recipe_ids)),
                shopping_list=shopping_list,
                checked_items=filter_checked_items(shopping_list, list(checked_items)),
                share_token=share_token,
                created_at=now,
                updated_at=now,
            )
            saved = await self._repository.replace(cart)

        CARTS_SAVED.inc()
        logger.info(
            "Cart saved",
            owner_id=owner_id,
            cart_id=saved.id,
            recipes=len(saved.recipe_ids),
            checked_items=len(saved.checked_items),
        )
        return saved

    async def update_checked_items(
        self,
        owner_id: str,
        checked_items: Sequence[str],
        *,
        share_token: str | None = None,
    ) -> Cart:
        """Replace the checked-item set, leaving everything else untouched.

        With ``share_token`` the update only applies while the cart is
        still shared under that token.

        Raises:
            CartNotFoundError: If the owner has no cart (or, with
                ``share_token``, the cart is no longer shared under it).
        """
        async with self._owner_lock(owner_id):
            cart = await self._repository.get(owner_id)
            if cart is None or (
                share_token is not None and cart.share_token != share_token
            ):
                raise CartNotFoundError(owner_id)

            keys = filter_checked_items(cart.shopping_list, list(checked_items))
            updated = await self._repository.update_checked_items(
                owner_id, keys, _now(), share_token=share_token
            )

        if updated is None:
            raise CartNotFoundError(owner_id)

        logger.debug(
            "Checked items updated",
            owner_id=owner_id,
            checked_items=len(keys),
            dropped=len(checked_items) - len(keys),
        )
        return updated

    async def ensure_share_token(
        self,
        owner_id: str,
        token_factory: Callable[[], str],
    ) -> tuple[Cart, bool]:
        """Give the cart a share token unless it already has one.

        Returns:
            The cart and whether a new token was issued.

        Raises:
            CartNotFoundError: If the owner has no cart.
        """
        async with self._owner_lock(owner_id):
            cart = await self._repository.get(owner_id)
            if cart is None:
                raise CartNotFoundError(owner_id)
            if cart.share_token:
                return cart, False

            candidate = token_factory()
            claimed = await self._repository.claim_share_token(
                owner_id, candidate, _now()
            )

        if claimed is None:
            raise CartNotFoundError(owner_id)
        return claimed, claimed.share_token == candidate

    async def clear_share_token(self, owner_id: str) -> bool:
        """Revoke the cart's share token; False if it was not shared."""
        async with self._owner_lock(owner_id):
            return await self._repository.clear_share_token(owner_id, _now())

    async def delete(self, owner_id: str) -> None:
        """Delete the owner's cart. Deleting a missing cart is not an error."""
        async with self._owner_lock(owner_id):
            deleted = await self._repository.delete(owner_id)

        if deleted:
            logger.info("Cart deleted", owner_id=owner_id)
