"""Recipe Provider client exceptions.

Caught by the endpoint layer and converted to HTTP responses.
"""

from __future__ import annotations


class RecipeProviderError(Exception):
    """Base exception for Recipe Provider client errors."""


class RecipeProviderUnavailableError(RecipeProviderError):
    """Raised when the Recipe Provider cannot be reached or is not configured."""


class RecipeProviderTimeoutError(RecipeProviderUnavailableError):
    """Raised when a request to the Recipe Provider times out."""


class RecipeProviderResponseError(RecipeProviderError):
    """Raised when the Recipe Provider returns an error or unreadable response."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)
