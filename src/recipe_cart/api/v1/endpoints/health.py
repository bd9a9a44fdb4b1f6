"""Health check endpoints.

Liveness and readiness probes for orchestrators and load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field

from recipe_cart.api.dependencies import get_app_settings
from recipe_cart.core.config import CartStoreBackend, Settings
from recipe_cart.database.connection import check_database_health


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with dependency status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of dependencies",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Report that the process is up. Dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse | ORJSONResponse:
    """Report whether the cart store is usable.

    The Recipe Provider is reported but does not affect readiness, since
    saved and shared carts keep working without it.
    """
    dependencies: dict[str, str] = {}

    if getattr(request.app.state, "cart_store", None) is None:
        dependencies["cart_store"] = "not_initialized"
    elif settings.cart_store_enum == CartStoreBackend.POSTGRES:
        dependencies.update(await check_database_health())
    else:
        dependencies["cart_store"] = "healthy"

    has_recipe_provider = getattr(request.app.state, "recipe_client", None) is not None
    dependencies["recipe_provider"] = (
        "configured" if has_recipe_provider else "not_configured"
    )

    ready = all(
        status in ("healthy", "configured", "not_configured")
        for status in dependencies.values()
    )
    body = ReadinessResponse(
        status="ready" if ready else "not_ready",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
    if ready:
        return body
    return ORJSONResponse(status_code=503, content=body.model_dump(mode="json"))
