"""Header-based authentication provider.

Trusts identity headers set by an upstream gateway. Use only for local
development, tests, or behind a gateway that already authenticated the
caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_cart.auth.providers.exceptions import AuthenticationError
from recipe_cart.auth.providers.models import AuthResult
from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class HeaderAuthProvider:
    """Extracts the cart owner from request headers.

    Attributes:
        user_id_header: Header containing the user ID (required).
        user_name_header: Header containing the display name (optional).
        roles_header: Header containing comma-separated roles.
        default_roles: Roles assigned when the roles header is missing.
    """

    def __init__(
        self,
        user_id_header: str = "X-User-ID",
        user_name_header: str = "X-User-Name",
        roles_header: str = "X-User-Roles",
        default_roles: list[str] | None = None,
    ) -> None:
        self.user_id_header = user_id_header
        self.user_name_header = user_name_header
        self.roles_header = roles_header
        self.default_roles = default_roles or ["user"]
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "header"

    async def validate_token(
        self,
        _token: str,
        request: Request | None = None,
    ) -> AuthResult:
        """Read the caller's identity from headers; the token is ignored.

        Raises:
            AuthenticationError: If request is None or the user ID header is missing.
        """
        if request is None:
            msg = "HeaderAuthProvider requires request object for header access"
            raise AuthenticationError(msg)

        user_id = request.headers.get(self.user_id_header, "").strip()
        if not user_id:
            msg = f"Missing required header: {self.user_id_header}"
            raise AuthenticationError(msg)

        user_name = request.headers.get(self.user_name_header, "").strip() or None

        roles_str = request.headers.get(self.roles_header, "")
        roles = [r.strip() for r in roles_str.split(",") if r.strip()]
        if not roles:
            roles = self.default_roles.copy()

        logger.debug("Authenticated via headers", user_id=user_id, roles=roles)

        return AuthResult(
            user_id=user_id,
            user_name=user_name,
            roles=roles,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={"source": "headers"},
        )

    async def initialize(self) -> None:
        """Initialize the provider."""
        logger.info(
            "HeaderAuthProvider initialized",
            user_id_header=self.user_id_header,
            user_name_header=self.user_name_header,
        )
        logger.warning(
            "HeaderAuthProvider is enabled - ensure this is only used in "
            "development/testing or behind a trusted gateway"
        )
        self._initialized = True

    async def shutdown(self) -> None:
        """Shutdown the provider. No cleanup needed."""
        self._initialized = False
