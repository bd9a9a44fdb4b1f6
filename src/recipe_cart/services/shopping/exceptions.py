"""Exceptions for the shopping-list service."""

from __future__ import annotations


class ShoppingServiceError(Exception):
    """Base exception for shopping-list errors."""


class InvalidInputError(ShoppingServiceError):
    """Raised when a shopping list is requested for no recipes."""
