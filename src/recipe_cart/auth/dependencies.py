"""FastAPI authentication dependencies.

The configured auth provider (local_jwt, header or disabled) identifies
the cart owner. Public shared-cart routes do not use these dependencies.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field

from recipe_cart.auth.providers import (
    AuthenticationError,
    AuthResult,
    TokenExpiredError,
    get_auth_provider,
)
from recipe_cart.core.exceptions import (
    ServiceUnavailableException,
    UnauthorizedException,
)


# Used for token extraction only; header and disabled modes need no token
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/oauth/token",
    scheme_name="JWT",
    description="JWT Bearer token authentication",
    auto_error=False,
)


class CurrentUser(BaseModel):
    """The authenticated cart owner."""

    id: str
    name: str | None = None
    roles: list[str] = []
    # Forwarded to the Recipe Provider on behalf of the caller
    access_token: str | None = Field(default=None, repr=False)

    @classmethod
    def from_auth_result(
        cls,
        result: AuthResult,
        access_token: str | None = None,
    ) -> CurrentUser:
        """Create CurrentUser from a provider's AuthResult."""
        return cls(
            id=result.user_id,
            name=result.user_name,
            roles=result.roles,
            access_token=access_token or None,
        )


async def get_auth_result(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> AuthResult:
    """Authenticate the request with the active auth provider.

    Raises:
        UnauthorizedException: 401 if authentication fails.
        ServiceUnavailableException: 503 if no provider is initialized.
    """
    try:
        provider = get_auth_provider()
    except RuntimeError:
        raise ServiceUnavailableException("Authentication not available") from None

    try:
        return await provider.validate_token(token or "", request)
    except TokenExpiredError:
        raise UnauthorizedException("Token has expired") from None
    except AuthenticationError as e:
        raise UnauthorizedException(str(e) or "Authentication failed") from None


async def get_current_user(
    auth_result: Annotated[AuthResult, Depends(get_auth_result)],
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> CurrentUser:
    """Primary dependency for owner-scoped routes."""
    return CurrentUser.from_auth_result(auth_result, access_token=token)


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]

__all__ = [
    "CurrentUser",
    "CurrentUserDep",
    "get_auth_result",
    "get_current_user",
    "oauth2_scheme",
]
