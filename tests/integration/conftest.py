"""Integration test fixtures.

Builds the full application with in-memory cart storage and a mocked
Recipe Provider client. ``ASGITransport`` does not run the lifespan, so
the services it would create are attached to ``app.state`` here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_cart.auth.providers import HeaderAuthProvider, set_auth_provider
from recipe_cart.cache.rate_limit import limiter
from recipe_cart.core.config import Settings
from recipe_cart.core.config.settings import (
    AppSettings,
    AuthSettings,
    CartSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
)
from recipe_cart.factory import create_app
from recipe_cart.services.cart import CartStore, SharingGateway
from recipe_cart.services.recipes import RecipeIngredients
from recipe_cart.services.shopping import ShoppingListService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_cart.database.repositories import InMemoryCartRepository


pytestmark = pytest.mark.integration

OWNER_HEADERS = {"X-User-ID": "owner-1", "X-User-Name": "Ada"}
GUEST_HEADERS = {"X-User-ID": "guest-1"}


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        APP_ENV="test",
        app=AppSettings(name="test-app", version="0.0.1-test"),
        auth=AuthSettings(mode="header"),
        cart=CartSettings(store="memory", public_base_url="https://recipes.example"),
        logging=LoggingSettings(level="DEBUG", format="json"),
        observability=ObservabilitySettings(metrics=MetricsSettings(enabled=False)),
    )


@pytest.fixture
def recipe_client() -> MagicMock:
    """Recipe Provider stand-in knowing three recipes."""
    recipes = {
        "r1": RecipeIngredients(
            id="r1", dish_name="Pancakes", ingredients=["2 cups flour", "1 egg"]
        ),
        "r2": RecipeIngredients(id="r2", dish_name="Air", ingredients=[]),
        "r3": RecipeIngredients(
            id="r3", dish_name="Crepes", ingredients=["flour", "1 cup milk"]
        ),
    }

    async def resolve(ids: list[str], _token: str | None = None) -> list:
        return [recipes[i] for i in ids if i in recipes]

    client = MagicMock()
    client.resolve_recipes = AsyncMock(side_effect=resolve)
    return client


@pytest.fixture
def app(
    test_settings: Settings,
    repository: InMemoryCartRepository,
    recipe_client: MagicMock,
) -> FastAPI:
    application = create_app(test_settings)

    store = CartStore(repository)
    application.state.cart_store = store
    application.state.sharing_gateway = SharingGateway(store)
    application.state.recipe_client = recipe_client
    application.state.shopping_list_service = ShoppingListService(recipe_client)

    set_auth_provider(HeaderAuthProvider())
    return application


@pytest.fixture(autouse=True)
def reset_rate_limits() -> None:
    """Clear rate limit counters shared through the global limiter."""
    limiter.reset()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def saved_cart(client: AsyncClient) -> dict:
    """Generate a list for r1..r3 and save it as owner-1's cart."""
    generated = await client.post(
        "/api/v1/recipes/shopping-list",
        json={"recipeIds": ["r1", "r2", "r3"]},
        headers=OWNER_HEADERS,
    )
    response = await client.put(
        "/api/v1/cart",
        json={
            "recipeIds": ["r1", "r2", "r3"],
            "shoppingList": generated.json(),
            "checkedItems": [],
        },
        headers=OWNER_HEADERS,
    )
    assert response.status_code == 200
    return response.json()
