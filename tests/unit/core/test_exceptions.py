"""Unit tests for exception handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from recipe_cart.core.exceptions import (
    BadRequestException,
    NotFoundException,
    setup_exception_handlers,
)


pytestmark = pytest.mark.unit


class _Body(BaseModel):
    count: int


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/missing")
    async def missing() -> None:
        raise NotFoundException("Shopping cart")

    @app.get("/bad")
    async def bad() -> None:
        raise BadRequestException("At least one recipe id is required")

    @app.post("/validate")
    async def validate(body: _Body) -> dict[str, int]:
        return {"count": body.count}

    @app.get("/boom")
    async def boom() -> None:
        msg = "db password leaked"
        raise RuntimeError(msg)

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:
    """Tests for the uniform error body."""

    def test_not_found(self, client: TestClient) -> None:
        """Should render AppException subclasses with their status."""
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"
        assert response.json()["message"] == "Shopping cart not found"

    def test_bad_request(self, client: TestClient) -> None:
        response = client.get("/bad")

        assert response.status_code == 400
        assert response.json()["error"] == "BAD_REQUEST"

    def test_validation_error(self, client: TestClient) -> None:
        """Should list field errors under details."""
        response = client.post("/validate", json={"count": "many"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "body.count"

    def test_unknown_route(self, client: TestClient) -> None:
        """Should render Starlette HTTP errors in the same shape."""
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_ERROR"

    def test_unhandled_exception(self, client: TestClient) -> None:
        """Should hide internals behind a 500."""
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_SERVER_ERROR"
        assert "db password leaked" not in response.json()["message"]
