"""Shared test fixtures for the Recipe Cart service tests."""

from __future__ import annotations

import os


# Settings are cached at import time by the rate limiter; pin the test
# environment before any application module is imported.
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from recipe_cart.auth.providers import set_auth_provider  # noqa: E402
from recipe_cart.database.repositories import InMemoryCartRepository  # noqa: E402
from recipe_cart.schemas.shopping import (  # noqa: E402
    MissingRecipe,
    ShoppingListResponse,
    ShoppingSection,
)
from recipe_cart.services.cart import CartStore, SharingGateway  # noqa: E402


@pytest.fixture
def shopping_list() -> ShoppingListResponse:
    """A two-section list: Pantry has 2 items, Dairy has 1."""
    return ShoppingListResponse(
        sections=[
            ShoppingSection(name="Pantry", ingredients=["2 cups flour", "1 tsp salt"]),
            ShoppingSection(name="Dairy", ingredients=["3 eggs"]),
        ],
        missing_recipes=[MissingRecipe(id="r3", dish_name="Toast")],
        total_recipes=3,
        recipes_with_ingredients=2,
    )


@pytest.fixture
def other_shopping_list() -> ShoppingListResponse:
    """A single-section list used to replace a saved cart."""
    return ShoppingListResponse(
        sections=[ShoppingSection(name="Produce", ingredients=["1 onion"])],
        total_recipes=1,
        recipes_with_ingredients=1,
    )


@pytest.fixture
def repository() -> InMemoryCartRepository:
    return InMemoryCartRepository()


@pytest.fixture
def cart_store(repository: InMemoryCartRepository) -> CartStore:
    return CartStore(repository)


@pytest.fixture
def sharing_gateway(cart_store: CartStore) -> SharingGateway:
    return SharingGateway(cart_store)


@pytest.fixture(autouse=True)
def reset_auth_provider():
    """Clear the process-wide auth provider around each test."""
    set_auth_provider(None)
    yield
    set_auth_provider(None)
