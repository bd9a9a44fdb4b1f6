"""Configuration module with YAML and environment variable support."""

from .settings import AuthMode, CartStoreBackend, Settings, get_settings


__all__ = [
    "AuthMode",
    "CartStoreBackend",
    "Settings",
    "get_settings",
]
