"""Rate limiting (SlowAPI, Redis or in-memory storage)."""

from recipe_cart.cache.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    rate_limit_shared_cart,
    setup_rate_limiting,
)


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "rate_limit_shared_cart",
    "setup_rate_limiting",
]
