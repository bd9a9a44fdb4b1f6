"""Sharing gateway: token-scoped access to carts.

Holding a share token is the only authorization for the read and
update operations here; there is no ownership check. Tokens are
resolved to an owner on every call, so a revoked or replaced cart is
never reachable through an old link.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from recipe_cart.observability.logging import get_logger
from recipe_cart.observability.metrics import SHARE_TOKENS_ISSUED, SHARED_CART_REQUESTS
from recipe_cart.services.cart.exceptions import (
    CartNotFoundError,
    SharedCartNotFoundError,
)
from recipe_cart.services.cart.models import SharedCart, ShareResult


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_cart.services.cart.store import CartStore

logger = get_logger(__name__)


class SharingGateway:
    """Issues, revokes and serves share tokens for carts."""

    def __init__(self, store: CartStore, token_bytes: int = 32) -> None:
        self._store = store
        self._token_bytes = token_bytes

    def _new_token(self) -> str:
        return secrets.token_urlsafe(self._token_bytes)

    async def share(self, owner_id: str) -> ShareResult:
        """Return the cart's share token, issuing one if needed.

        Sharing an already-shared cart returns the same token.

        Raises:
            CartNotFoundError: If the owner has no cart.
        """
        cart, created = await self._store.ensure_share_token(owner_id, self._new_token)
        if created:
            SHARE_TOKENS_ISSUED.inc()
            logger.info("Share token issued", owner_id=owner_id)

        assert cart.share_token is not None
        return ShareResult(share_token=cart.share_token, created=created)

    async def unshare(self, owner_id: str) -> None:
        """Revoke the cart's share token. A no-op when it is not shared."""
        if await self._store.clear_share_token(owner_id):
            logger.info("Share token revoked", owner_id=owner_id)

    async def read_by_token(self, share_token: str) -> SharedCart:
        """Return the shared view of the cart behind ``share_token``.

        Raises:
            SharedCartNotFoundError: If the token does not resolve.
        """
        cart = await self._store.get_by_share_token(share_token)
        if cart is None or cart.share_token != share_token:
            SHARED_CART_REQUESTS.labels(operation="read", outcome="not_found").inc()
            raise SharedCartNotFoundError

        SHARED_CART_REQUESTS.labels(operation="read", outcome="ok").inc()
        return SharedCart(
            shopping_list=cart.shopping_list,
            checked_items=cart.visible_checked_items,
            owner_name=cart.owner_name,
            share_token=share_token,
        )

    async def update_by_token(
        self,
        share_token: str,
        checked_items: Sequence[str],
    ) -> None:
        """Replace the checked items of the cart behind ``share_token``.

        The token is checked again under the owner's lock, so an update
        racing with unshare or a cart replacement fails cleanly.

        Raises:
            SharedCartNotFoundError: If the token does not resolve.
        """
        cart = await self._store.get_by_share_token(share_token)
        if cart is None:
            SHARED_CART_REQUESTS.labels(operation="update", outcome="not_found").inc()
            raise SharedCartNotFoundError

        try:
            await self._store.update_checked_items(
                cart.owner_id, checked_items, share_token=share_token
            )
        except CartNotFoundError:
            SHARED_CART_REQUESTS.labels(operation="update", outcome="not_found").inc()
            raise SharedCartNotFoundError from None

        SHARED_CART_REQUESTS.labels(operation="update", outcome="ok").inc()
