"""Cart repository protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from datetime import datetime

    from recipe_cart.services.cart.models import Cart


@runtime_checkable
class CartRepository(Protocol):
    """Persistence for the single active cart of each owner.

    Every mutation is one atomic operation against the backing store.
    Methods returning ``Cart | None`` return None when no row matched.
    """

    @property
    def backend_name(self) -> str:
        """Short backend name for logging."""
        ...

    async def get(self, owner_id: str) -> Cart | None:
        """Return the owner's cart."""
        ...

    async def get_by_share_token(self, share_token: str) -> Cart | None:
        """Return the cart currently shared under ``share_token``."""
        ...

    async def replace(self, cart: Cart) -> Cart:
        """Insert the cart, replacing any existing cart of the same owner."""
        ...

    async def update_checked_items(
        self,
        owner_id: str,
        checked_items: list[str],
        updated_at: datetime,
        *,
        share_token: str | None = None,
    ) -> Cart | None:
        """Replace the checked items only.

        When ``share_token`` is given the update applies only while the
        cart still carries that token.
        """
        ...

    async def claim_share_token(
        self,
        owner_id: str,
        share_token: str,
        updated_at: datetime,
    ) -> Cart | None:
        """Set ``share_token`` unless the cart already has one."""
        ...

    async def clear_share_token(self, owner_id: str, updated_at: datetime) -> bool:
        """Revoke the cart's share token; False when there was none."""
        ...

    async def delete(self, owner_id: str) -> bool:
        """Delete the owner's cart; False when there was none."""
        ...
