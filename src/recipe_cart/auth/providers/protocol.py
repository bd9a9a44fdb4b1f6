"""Authentication provider protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from recipe_cart.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for authentication providers.

    Every auth mode (local_jwt, header, disabled) implements this
    interface so the dependency layer does not care which one is active.
    """

    @property
    def provider_name(self) -> str:
        """Return a short provider name for logging."""
        ...

    async def validate_token(
        self,
        token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Validate a credential and return the authenticated caller.

        Args:
            token: Bearer token; may be empty for header-based auth.
            request: Optional request for providers that read headers.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is missing or invalid.
            AuthenticationError: For other authentication failures.
        """
        ...

    async def initialize(self) -> None:
        """Validate configuration and acquire resources at startup."""
        ...

    async def shutdown(self) -> None:
        """Release provider resources."""
        ...
