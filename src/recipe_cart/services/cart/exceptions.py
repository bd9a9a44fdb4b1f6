"""Exceptions for cart storage and sharing."""

from __future__ import annotations


class CartServiceError(Exception):
    """Base exception for cart errors."""


class CartNotFoundError(CartServiceError):
    """Raised when the owner has no saved cart."""

    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id
        super().__init__("Shopping cart not found")


class SharedCartNotFoundError(CartServiceError):
    """Raised when a share token does not resolve to a cart.

    Covers tokens that never existed, were revoked, or whose cart was
    replaced or deleted.
    """

    def __init__(self) -> None:
        super().__init__("Shared cart not found")
