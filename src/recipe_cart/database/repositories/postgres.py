"""PostgreSQL cart repository.

Raw asyncpg queries against ``{schema}.shopping_carts``: one row per
owner (unique ``owner_id``), the shopping list snapshot and checked
items as JSONB, and a unique partial index on ``share_token``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_cart.database.connection import get_database_pool, quote_schema
from recipe_cart.observability.logging import get_logger
from recipe_cart.schemas.shopping import ShoppingListResponse
from recipe_cart.services.cart.models import Cart


if TYPE_CHECKING:
    from datetime import datetime

    from asyncpg import Pool, Record

logger = get_logger(__name__)

_COLUMNS = (
    "id, owner_id, owner_name, recipe_ids, shopping_list, checked_items, "
    "share_token, created_at, updated_at"
)


class PostgresCartRepository:
    """Cart repository backed by PostgreSQL.

    Every method is a single statement, so each mutation is atomic.
    """

    def __init__(self, pool: Pool | None = None, schema: str = "recipe_cart") -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
            schema: PostgreSQL schema holding the carts table.
        """
        self._pool = pool
        self._table = f"{quote_schema(schema)}.shopping_carts"

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    @property
    def backend_name(self) -> str:
        return "postgres"

    async def get(self, owner_id: str) -> Cart | None:
        query = f"SELECT {_COLUMNS} FROM {self._table} WHERE owner_id = $1"  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, owner_id)
        return self._row_to_cart(row)

    async def get_by_share_token(self, share_token: str) -> Cart | None:
        query = f"SELECT {_COLUMNS} FROM {self._table} WHERE share_token = $1"  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, share_token)
        return self._row_to_cart(row)

    async def replace(self, cart: Cart) -> Cart:
        query = f"""
            INSERT INTO {self._table} ({_COLUMNS})
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            ON CONFLICT (owner_id) DO UPDATE SET
                id = EXCLUDED.id,
                owner_name = EXCLUDED.owner_name,
                recipe_ids = EXCLUDED.recipe_ids,
                shopping_list = EXCLUDED.shopping_list,
                checked_items = EXCLUDED.checked_items,
                share_token = EXCLUDED.share_token,
                created_at = EXCLUDED.created_at,
                updated_at = EXCLUDED.updated_at
            RETURNING {_COLUMNS}
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                query,
                cart.id,
                cart.owner_id,
                cart.owner_name,
                cart.recipe_ids,
                cart.shopping_list.model_dump(mode="json"),
                cart.checked_items,
                cart.share_token,
                cart.created_at,
                cart.updated_at,
            )
        saved = self._row_to_cart(row)
        if saved is None:
            msg = "Cart upsert returned no row"
            raise RuntimeError(msg)
        return saved

    async def update_checked_items(
        self,
        owner_id: str,
        checked_items: list[str],
        updated_at: datetime,
        *,
        share_token: str | None = None,
    ) -> Cart | None:
        query = f"""
            UPDATE {self._table}
            SET checked_items = $2, updated_at = $3
            WHERE owner_id = $1 AND ($4::text IS NULL OR share_token = $4)
            RETURNING {_COLUMNS}
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                query, owner_id, checked_items, updated_at, share_token
            )
        return self._row_to_cart(row)

    async def claim_share_token(
        self,
        owner_id: str,
        share_token: str,
        updated_at: datetime,
    ) -> Cart | None:
        query = f"""
            UPDATE {self._table}
            SET share_token = COALESCE(share_token, $2),
                updated_at = CASE WHEN share_token IS NULL THEN $3 ELSE updated_at END
            WHERE owner_id = $1
            RETURNING {_COLUMNS}
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, owner_id, share_token, updated_at)
        return self._row_to_cart(row)

    async def clear_share_token(self, owner_id: str, updated_at: datetime) -> bool:
        query = f"""
            UPDATE {self._table}
            SET share_token = NULL, updated_at = $2
            WHERE owner_id = $1 AND share_token IS NOT NULL
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            result = await conn.execute(query, owner_id, updated_at)
        return result != "UPDATE 0"

    async def delete(self, owner_id: str) -> bool:
        query = f"DELETE FROM {self._table} WHERE owner_id = $1"  # noqa: S608
        async with self.pool.acquire() as conn:
            result = await conn.execute(query, owner_id)
        return result != "DELETE 0"

    @staticmethod
    def _row_to_cart(row: Record | None) -> Cart | None:
        """Convert a database row to a Cart."""
        if row is None:
            return None
        return Cart(
            id=str(row["id"]),
            owner_id=row["owner_id"],
            owner_name=row["owner_name"],
            recipe_ids=list(row["recipe_ids"] or []),
            shopping_list=ShoppingListResponse.model_validate(row["shopping_list"]),
            checked_items=list(row["checked_items"] or []),
            share_token=row["share_token"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
