"""Authentication provider factory.

Creates the provider selected by ``auth.mode`` and holds the active
instance for the dependency layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_cart.auth.providers.exceptions import ConfigurationError
from recipe_cart.auth.providers.header import HeaderAuthProvider
from recipe_cart.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_cart.auth.providers.models import AuthResult
from recipe_cart.core.config import AuthMode, get_settings
from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_cart.auth.providers.protocol import AuthProvider
    from recipe_cart.core.config import Settings

logger = get_logger(__name__)

# Fixed development secret - safe for local dev, blocked in production
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105

ANONYMOUS_USER_ID = "anonymous"


def _get_jwt_secret(settings: Settings) -> str:
    """Return the JWT secret, refusing the development fallback in production.

    Raises:
        ConfigurationError: If the secret is not set in production.
    """
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
        raise ConfigurationError(msg)

    logger.warning("Using insecure development JWT secret - do not use in production")
    return _DEV_JWT_SECRET


# Provider state container (avoids global statement for mutation)
_state: dict[str, AuthProvider | None] = {"provider": None}


class DisabledAuthProvider:
    """Auth provider that treats every caller as one anonymous owner.

    All callers share a single cart. Only suitable for single-user
    deployments and tests.
    """

    @property
    def provider_name(self) -> str:
        return "disabled"

    async def validate_token(
        self,
        _token: str,
        _request: object = None,
    ) -> AuthResult:
        """Return the anonymous user."""
        return AuthResult(
            user_id=ANONYMOUS_USER_ID,
            roles=["anonymous"],
            token_type="none",  # noqa: S106 - not a password
            raw_claims={"auth_disabled": True},
        )

    async def initialize(self) -> None:
        logger.warning(
            "DisabledAuthProvider initialized - authentication is disabled! "
            "Ensure this is intentional and not a production deployment."
        )

    async def shutdown(self) -> None:
        pass


def create_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create an authentication provider based on configuration.

    Args:
        settings: Application settings. If None, loaded from environment.

    Returns:
        Configured AuthProvider instance.

    Raises:
        ConfigurationError: If required settings are missing for the auth mode.
    """
    if settings is None:
        settings = get_settings()

    mode = settings.auth_mode_enum
    logger.info("Creating auth provider", mode=mode.value)

    if mode == AuthMode.DISABLED:
        return DisabledAuthProvider()

    if mode == AuthMode.HEADER:
        return HeaderAuthProvider(
            user_id_header=settings.auth.headers.user_id,
            user_name_header=settings.auth.headers.user_name,
            roles_header=settings.auth.headers.roles,
        )

    if mode == AuthMode.LOCAL_JWT:
        return LocalJWTAuthProvider(
            secret_key=_get_jwt_secret(settings),
            algorithm=settings.auth.jwt.algorithm,
            issuer=settings.auth.jwt_validation.issuer,
            audience=settings.auth.jwt_validation.audience or None,
        )

    msg = f"Unknown auth mode: {mode}"
    raise ConfigurationError(msg)


def get_auth_provider() -> AuthProvider:
    """Return the active auth provider.

    Raises:
        RuntimeError: If the provider has not been initialized.
    """
    provider = _state["provider"]
    if provider is None:
        msg = "Auth provider not initialized. Call set_auth_provider() during startup."
        raise RuntimeError(msg)
    return provider


def set_auth_provider(provider: AuthProvider | None) -> None:
    """Set (or clear, with None) the active auth provider."""
    _state["provider"] = provider
    if provider is not None:
        logger.info("Auth provider set", provider=provider.provider_name)


async def initialize_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create, initialize and activate the configured auth provider."""
    provider = create_auth_provider(settings)
    await provider.initialize()
    set_auth_provider(provider)
    return provider


async def shutdown_auth_provider() -> None:
    """Shut down and clear the active auth provider."""
    provider = _state["provider"]
    if provider is not None:
        await provider.shutdown()
        _state["provider"] = None
        logger.info("Auth provider shutdown complete")
