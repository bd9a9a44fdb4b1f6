"""Request logging middleware.

Logs each request and its outcome with the request context bound.
Share tokens are credentials, so they are masked in logged paths.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_cart.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

_SHARED_CART_PATH_RE = re.compile(r"(/cart/shared/)[^/]+")


def redact_path(path: str) -> str:
    """Mask the share token in ``.../cart/shared/{token}`` paths."""
    return _SHARED_CART_PATH_RE.sub(r"\1***", path)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for structured request/response logging."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/metrics", "/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=redact_path(request.url.path),
            client_ip=self._get_client_ip(request),
        )

        logger.info("Request started")
        response = await call_next(request)
        logger.info("Request completed", status_code=response.status_code)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request, considering proxies."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
