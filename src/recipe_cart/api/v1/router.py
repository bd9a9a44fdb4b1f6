"""API v1 router aggregating all endpoint routers.

Mounted under ``api.v1_prefix`` (``/api/v1`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_cart.api.v1.endpoints import cart, health, shared, shopping


router = APIRouter()

router.include_router(health.router)
router.include_router(shopping.router)
router.include_router(cart.router)

# Public, token-authorized routes; no auth dependency
router.include_router(shared.router)
