"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics
- Cart and sharing counters incremented by the services
- Metrics endpoint configuration
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_cart.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "recipe_cart"


SHOPPING_LISTS_GENERATED = Counter(
    "shopping_lists_generated_total",
    "Shopping lists aggregated from recipe ingredients",
    namespace=METRIC_NAMESPACE,
)

CARTS_SAVED = Counter(
    "carts_saved_total",
    "Carts written, replacing any previous cart of the owner",
    namespace=METRIC_NAMESPACE,
)

SHARE_TOKENS_ISSUED = Counter(
    "share_tokens_issued_total",
    "New share tokens generated for carts",
    namespace=METRIC_NAMESPACE,
)

SHARED_CART_REQUESTS = Counter(
    "shared_cart_requests_total",
    "Token-scoped shared cart operations",
    ["operation", "outcome"],
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator:
    """Configure Prometheus HTTP instrumentation and expose /metrics.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Returns:
        Configured Instrumentator instance.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
            should_only_respect_2xx_for_highr=False,
        )
    )

    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = [
    "CARTS_SAVED",
    "SHARED_CART_REQUESTS",
    "SHARE_TOKENS_ISSUED",
    "SHOPPING_LISTS_GENERATED",
    "setup_metrics",
]
