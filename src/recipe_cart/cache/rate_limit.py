"""Rate limiting using SlowAPI.

Counters live in Redis when ``redis.enabled`` is set, otherwise in
process memory. The public shared-cart update route has its own
stricter, IP-keyed limit since it needs no authentication.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from recipe_cart.core.config import get_settings
from recipe_cart.core.exceptions import ErrorResponse
from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)


def _get_client_ip(request: Request) -> str:
    """Rate limit key: the first X-Forwarded-For hop, else the peer address."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return str(get_remote_address(request))


def _get_shared_cart_rate_limit_key(request: Request) -> str:
    return f"shared-cart:{_get_client_ip(request)}"


def _shared_cart_limit() -> str:
    return get_settings().rate_limiting.shared_cart


def create_limiter() -> Limiter:
    """Create and configure the rate limiter."""
    settings = get_settings()

    return Limiter(
        key_func=_get_client_ip,
        default_limits=[settings.rate_limiting.default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
    )


# Global limiter instance; route decorators bind to it at import time
limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Render a 429 in the application's error format."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        method=request.method,
        client_ip=_get_client_ip(request),
        limit=str(exc.detail),
    )

    response = ORJSONResponse(
        status_code=429,
        content=ErrorResponse(
            error="RATE_LIMIT_EXCEEDED",
            message="Too many requests. Please try again later.",
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(  # noqa: SLF001
            response, view_rate_limit
        )
    return response


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter and its 429 handler to the application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info("Rate limiting configured")


def rate_limit_shared_cart() -> Any:
    """Apply the shared-cart update limit (per client IP).

    Example:
        @router.put("/cart/shared/{share_token}")
        @rate_limit_shared_cart()
        async def update_shared_cart(request: Request, ...):
            ...
    """
    return limiter.limit(_shared_cart_limit, key_func=_get_shared_cart_rate_limit_key)
