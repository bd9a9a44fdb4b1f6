"""Authentication providers package.

Pluggable providers implementing the AuthProvider protocol; the factory
builds the one selected by ``auth.mode``.

Available providers:
- LocalJWTAuthProvider: Validates JWTs locally
- HeaderAuthProvider: Reads the user from gateway headers
- DisabledAuthProvider: Single anonymous owner
"""

from recipe_cart.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from recipe_cart.auth.providers.factory import (
    DisabledAuthProvider,
    create_auth_provider,
    get_auth_provider,
    initialize_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)
from recipe_cart.auth.providers.header import HeaderAuthProvider
from recipe_cart.auth.providers.local_jwt import LocalJWTAuthProvider
from recipe_cart.auth.providers.models import AuthResult
from recipe_cart.auth.providers.protocol import AuthProvider


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthenticationError",
    "ConfigurationError",
    "DisabledAuthProvider",
    "HeaderAuthProvider",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
    "get_auth_provider",
    "initialize_auth_provider",
    "set_auth_provider",
    "shutdown_auth_provider",
]
