"""Recipe Provider HTTP client.

Resolves recipe ids to their ingredient lists through the recipe
storage service that owns them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import orjson
from pydantic import TypeAdapter, ValidationError

from recipe_cart.observability.logging import get_logger
from recipe_cart.services.recipes.exceptions import (
    RecipeProviderResponseError,
    RecipeProviderTimeoutError,
    RecipeProviderUnavailableError,
)
from recipe_cart.services.recipes.schemas import RecipeBatchRequest, RecipeIngredients


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_cart.core.config import Settings


logger = get_logger(__name__)

_RECIPE_LIST_ADAPTER = TypeAdapter(list[RecipeIngredients])


class RecipeProviderClient:
    """HTTP client for the Recipe Provider.

    Example:
        ```python
        client = RecipeProviderClient(settings)
        await client.initialize()

        recipes = await client.resolve_recipes(["r1", "r2"], auth_token="...")

        await client.shutdown()
        ```
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        """Base URL of the Recipe Provider, without a trailing slash."""
        url = self._settings.downstream_services.recipe_provider.url
        if not url:
            msg = "Recipe Provider URL not configured"
            raise RecipeProviderUnavailableError(msg)
        return url.rstrip("/")

    async def initialize(self) -> None:
        """Create the pooled HTTP client."""
        if self._http_client is None:
            timeout = self._settings.downstream_services.recipe_provider.timeout
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        logger.info("RecipeProviderClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("RecipeProviderClient shutdown")

    async def resolve_recipes(
        self,
        recipe_ids: Sequence[str],
        auth_token: str | None = None,
    ) -> list[RecipeIngredients]:
        """Fetch ingredient lists for the given recipe ids.

        Ids the provider does not know are simply absent from the result.

        Args:
            recipe_ids: Recipe identifiers to resolve.
            auth_token: Caller's bearer token, forwarded when present.

        Returns:
            Resolved recipes, in the provider's order.

        Raises:
            RecipeProviderUnavailableError: If the provider is unreachable.
            RecipeProviderTimeoutError: If the request times out.
            RecipeProviderResponseError: For error or malformed responses.
        """
        if not recipe_ids:
            return []

        if not self._http_client:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        url = f"{self.base_url}/recipes/batch"
        payload = orjson.dumps(RecipeBatchRequest(ids=list(recipe_ids)).model_dump())
        headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else None

        logger.debug("Resolving recipes", url=url, count=len(recipe_ids))

        try:
            response = await self._http_client.post(
                url, content=payload, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.warning("Request to Recipe Provider timed out")
            raise RecipeProviderTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to Recipe Provider", error=str(e))
            msg = f"Failed to connect to Recipe Provider: {e}"
            raise RecipeProviderUnavailableError(msg) from e

        if response.status_code != 200:
            self._raise_for_error(response)

        try:
            recipes = _RECIPE_LIST_ADAPTER.validate_python(
                self._unwrap(orjson.loads(response.content))
            )
        except (orjson.JSONDecodeError, ValidationError) as e:
            logger.warning("Recipe Provider returned malformed body", error=str(e))
            msg = "Malformed response from Recipe Provider"
            raise RecipeProviderResponseError(response.status_code, msg) from e

        logger.debug(
            "Recipes resolved",
            requested=len(recipe_ids),
            resolved=len(recipes),
        )
        return recipes

    @staticmethod
    def _unwrap(body: Any) -> Any:
        """Accept either a bare list or a ``{"recipes": [...]}`` envelope."""
        if isinstance(body, dict) and "recipes" in body:
            return body["recipes"]
        return body

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        status_code = response.status_code

        try:
            message = orjson.loads(response.content).get("message", "Unknown error")
        except (orjson.JSONDecodeError, AttributeError):
            message = response.text or f"HTTP {status_code}"

        logger.warning(
            "Recipe Provider returned error",
            status_code=status_code,
            message=message,
        )

        if status_code >= 500:
            raise RecipeProviderUnavailableError(message)
        raise RecipeProviderResponseError(status_code, message)
