"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (local, test, development, production)
- Environment variable loading for secrets
- Type validation and coercion
- Computed properties for derived values
- Caching for performance
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class AuthMode(StrEnum):
    """Authentication mode configuration.

    Determines how the calling owner is identified:
    - LOCAL_JWT: Validate JWTs locally using shared secret
    - HEADER: Extract user from X-User-ID header (trusted gateway / development)
    - DISABLED: Every caller is the same anonymous owner
    """

    LOCAL_JWT = "local_jwt"
    HEADER = "header"
    DISABLED = "disabled"


class CartStoreBackend(StrEnum):
    """Persistence backend for shopping carts."""

    POSTGRES = "postgres"
    MEMORY = "memory"


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Cart Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class JwtSettings(BaseModel):
    """JWT token settings."""

    algorithm: str = "HS256"


class AuthHeaderSettings(BaseModel):
    """Header-based auth settings."""

    user_id: str = "X-User-ID"
    user_name: str = "X-User-Name"
    roles: str = "X-User-Roles"


class AuthJwtValidationSettings(BaseModel):
    """JWT validation settings."""

    issuer: str | None = None
    audience: list[str] = []


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    mode: str = "local_jwt"
    jwt: JwtSettings = JwtSettings()
    headers: AuthHeaderSettings = AuthHeaderSettings()
    jwt_validation: AuthJwtValidationSettings = AuthJwtValidationSettings()


class RedisSettings(BaseModel):
    """Redis configuration settings.

    Redis only backs the rate limiter; when disabled, limits are kept
    in process memory.
    """

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    user: str | None = None  # Redis ACL username (Redis 6.0+)
    rate_limit_db: int = 2


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    host: str = "localhost"
    port: int = 5432
    name: str = "recipe_database"
    db_schema: str = "recipe_cart"  # PostgreSQL schema
    user: str | None = None
    min_pool_size: int = 2
    max_pool_size: int = 10
    command_timeout: float = 30.0  # Query timeout in seconds
    ssl: bool = False
    create_schema: bool = True  # Bootstrap table/indexes at startup


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration."""

    default: str = "100/minute"
    shared_cart: str = "20/5minutes"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class CartSettings(BaseModel):
    """Shopping cart and sharing configuration."""

    store: str = "memory"
    share_token_bytes: int = Field(default=32, ge=16)
    # Public origin of the web app, used to build share links. When unset
    # the request's base URL is used.
    public_base_url: str | None = None
    shared_path: str = "/cart/shared"


class RecipeProviderSettings(BaseModel):
    """Recipe Provider client configuration."""

    url: str | None = None
    timeout: float = 10.0


class DownstreamServicesSettings(BaseModel):
    """Configuration for downstream service clients."""

    recipe_provider: RecipeProviderSettings = RecipeProviderSettings()


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Values passed to Settings()
    2. Environment variables
    3. .env file (secrets only)
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: CART__STORE=postgres overrides cart.store.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    redis: RedisSettings = RedisSettings()
    database: DatabaseSettings = DatabaseSettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    cart: CartSettings = CartSettings()
    downstream_services: DownstreamServicesSettings = DownstreamServicesSettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    JWT_SECRET_KEY: str = ""
    REDIS_PASSWORD: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings loading order (see class docstring)."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Computed Fields
    # =========================================================================

    @property
    def auth_mode_enum(self) -> AuthMode:
        """Get auth mode as enum with validation."""
        try:
            return AuthMode(self.auth.mode.lower())
        except ValueError:
            msg = (
                f"Invalid auth mode: {self.auth.mode}. "
                f"Must be one of: {', '.join(m.value for m in AuthMode)}"
            )
            raise ValueError(msg) from None

    @property
    def cart_store_enum(self) -> CartStoreBackend:
        """Get cart store backend as enum with validation."""
        try:
            return CartStoreBackend(self.cart.store.lower())
        except ValueError:
            msg = (
                f"Invalid cart store: {self.cart.store}. "
                f"Must be one of: {', '.join(b.value for b in CartStoreBackend)}"
            )
            raise ValueError(msg) from None

    @property
    def redis_rate_limit_url(self) -> str:
        """Build Redis rate limit connection URL.

        URL format: redis://[user:password@]host:port/db
        """
        auth_part = ""
        if self.redis.user and self.REDIS_PASSWORD:
            auth_part = f"{self.redis.user}:{self.REDIS_PASSWORD}@"
        elif self.REDIS_PASSWORD:
            auth_part = f":{self.REDIS_PASSWORD}@"
        elif self.redis.user:
            auth_part = f"{self.redis.user}@"

        return (
            f"redis://{auth_part}{self.redis.host}:{self.redis.port}"
            f"/{self.redis.rate_limit_db}"
        )

    @property
    def rate_limit_storage_uri(self) -> str:
        """Storage backend URI for the rate limiter."""
        if self.redis.enabled:
            return self.redis_rate_limit_url
        return "memory://"

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once.
    """
    return Settings()
