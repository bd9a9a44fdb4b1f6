"""Request ID and timing middleware.

This middleware:
- Generates or propagates a request ID and binds it to the logging context
- Measures processing time and reports it in a response header
- Logs slow requests
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_cart.observability.logging import bind_context, clear_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

# Threshold for slow request warning (in seconds)
SLOW_REQUEST_THRESHOLD = 1.0


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request ID and timing header to every response."""

    def __init__(
        self,
        app: ASGIApp,
        request_id_header: str = "X-Request-ID",
        timing_header: str = "X-Process-Time",
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.request_id_header = request_id_header
        self.timing_header = timing_header
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_context()

        request_id = request.headers.get(self.request_id_header) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time
        process_time_ms = round(process_time * 1000, 2)

        response.headers[self.request_id_header] = request_id
        response.headers[self.timing_header] = f"{process_time_ms}ms"

        if process_time > self.slow_threshold:
            logger.warning(
                "Slow request detected",
                method=request.method,
                process_time_ms=process_time_ms,
                threshold_ms=self.slow_threshold * 1000,
            )

        return response
