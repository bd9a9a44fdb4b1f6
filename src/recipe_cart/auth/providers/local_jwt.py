"""Local JWT authentication provider.

Validates JWTs with a secret shared with the issuing auth service, so no
network call is needed per request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from recipe_cart.auth.providers.exceptions import TokenExpiredError, TokenInvalidError
from recipe_cart.auth.providers.models import AuthResult
from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class LocalJWTAuthProvider:
    """Validates JWTs locally using the configured secret key.

    Attributes:
        secret_key: The secret key for HS256 or public key for RS256.
        algorithm: JWT signing algorithm.
        issuer: Expected 'iss' claim value (optional).
        audience: Expected 'aud' claim values (optional).
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: list[str] | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience if audience else None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "local_jwt"

    async def validate_token(
        self,
        token: str,
        _request: Request | None = None,
    ) -> AuthResult:
        """Validate a JWT and return the authenticated caller.

        The display name is read from the ``name`` claim, falling back to
        ``preferred_username``.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is missing, malformed or unsigned.
        """
        if not token:
            msg = "Missing bearer token"
            raise TokenInvalidError(msg)

        decode_kwargs: dict[str, Any] = {"algorithms": [self.algorithm]}
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer
        # python-jose accepts a single expected audience; any configured
        # audience is allowed, so that check happens after decoding
        decode_kwargs["options"] = {"verify_aud": False}

        try:
            payload = jwt.decode(token, self.secret_key, **decode_kwargs)
        except ExpiredSignatureError as e:
            logger.debug("Token expired during local validation")
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e
        except JWTClaimsError as e:
            logger.warning("JWT claims validation failed", error=str(e))
            raise TokenInvalidError(str(e)) from e
        except JWTError as e:
            logger.warning("JWT validation failed", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        token_type = payload.get("type", "access")
        if token_type not in ("access", "api_key"):
            msg = f"Invalid token type: {token_type}. Expected 'access'."
            raise TokenInvalidError(msg)

        if self.audience:
            aud = payload.get("aud") or []
            audience_list = [aud] if isinstance(aud, str) else list(aud)
            if not set(audience_list) & set(self.audience):
                msg = "Invalid audience"
                raise TokenInvalidError(msg)

        user_id = payload.get("sub")
        if not user_id:
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=str(user_id),
            user_name=payload.get("name") or payload.get("preferred_username"),
            roles=payload.get("roles", []),
            token_type=token_type,
            expires_at=payload.get("exp"),
            raw_claims=payload,
        )

    async def initialize(self) -> None:
        """Check that a secret key is configured."""
        if not self.secret_key:
            msg = "JWT secret key is not configured"
            raise TokenInvalidError(msg)

        logger.info(
            "LocalJWTAuthProvider initialized",
            algorithm=self.algorithm,
            issuer_validation=self.issuer is not None,
            audience_validation=self.audience is not None,
        )
        self._initialized = True

    async def shutdown(self) -> None:
        """Shutdown the provider. No cleanup needed for local JWT."""
        self._initialized = False
