"""Custom middleware components."""

from recipe_cart.core.middleware.logging import LoggingMiddleware, redact_path
from recipe_cart.core.middleware.request_context import RequestContextMiddleware


__all__ = ["LoggingMiddleware", "RequestContextMiddleware", "redact_path"]
