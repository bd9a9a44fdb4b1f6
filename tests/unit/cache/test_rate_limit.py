"""Unit tests for rate limiting.

Tests cover:
- Key generation
- Rate limit exceeded handler
- Setup functions
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from slowapi.errors import RateLimitExceeded

from recipe_cart.cache.rate_limit import (
    _get_client_ip,
    _get_shared_cart_rate_limit_key,
    _shared_cart_limit,
    limiter,
    rate_limit_exceeded_handler,
    setup_rate_limiting,
)


pytestmark = pytest.mark.unit


class TestKeys:
    """Tests for rate limit key functions."""

    def test_uses_first_forwarded_hop(self) -> None:
        """Should key on the original client behind proxies."""
        request = MagicMock()
        request.headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1"}

        assert _get_client_ip(request) == "203.0.113.7"

    def test_falls_back_to_peer_address(self) -> None:
        """Should use the socket peer when no proxy header is present."""
        request = MagicMock()
        request.headers = {}

        with patch(
            "recipe_cart.cache.rate_limit.get_remote_address",
            return_value="192.168.1.1",
        ):
            assert _get_client_ip(request) == "192.168.1.1"

    def test_shared_cart_key_is_namespaced(self) -> None:
        """Should keep shared-cart counters apart from default ones."""
        request = MagicMock()
        request.headers = {"x-forwarded-for": "203.0.113.7"}

        assert _get_shared_cart_rate_limit_key(request) == "shared-cart:203.0.113.7"

    def test_shared_cart_limit_from_settings(self) -> None:
        """Should read the limit string from settings."""
        assert _shared_cart_limit() == "20/5minutes"


class TestRateLimitExceededHandler:
    """Tests for rate_limit_exceeded_handler()."""

    async def test_returns_429_error_body(self) -> None:
        """Should render a 429 in the application's error format."""
        request = MagicMock()
        request.method = "PUT"
        request.headers = {}
        request.state.request_id = "req-1"
        request.state.view_rate_limit = None
        exc = MagicMock(spec=RateLimitExceeded)
        exc.detail = "20 per 5 minute"

        with patch(
            "recipe_cart.cache.rate_limit.get_remote_address",
            return_value="127.0.0.1",
        ):
            response = await rate_limit_exceeded_handler(request, exc)

        assert response.status_code == 429
        body = json.loads(response.body)
        assert body["error"] == "RATE_LIMIT_EXCEEDED"
        assert body["request_id"] == "req-1"


class TestSetupRateLimiting:
    """Tests for setup_rate_limiting()."""

    def test_attaches_limiter_and_handler(self) -> None:
        """Should expose the limiter on app.state and register the handler."""
        app = MagicMock()

        setup_rate_limiting(app)

        assert app.state.limiter is limiter
        app.add_exception_handler.assert_called_once_with(
            RateLimitExceeded, rate_limit_exceeded_handler
        )
