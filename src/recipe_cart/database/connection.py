"""PostgreSQL connection pool management.

This module provides:
- Async connection pool management via asyncpg
- JSONB encoding/decoding with orjson
- Bootstrap of the cart table and its indexes
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import asyncpg
import orjson

from recipe_cart.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Connection, Pool

    from recipe_cart.core.config import Settings

logger = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Global connection pool
_pool: Pool | None = None


def quote_schema(schema: str) -> str:
    """Validate a schema name before it is interpolated into SQL."""
    if not _IDENTIFIER_RE.match(schema):
        msg = f"Invalid database schema name: {schema!r}"
        raise ValueError(msg)
    return schema


async def _init_connection(conn: Connection) -> None:
    """Decode JSONB columns to Python objects on every pooled connection."""
    await conn.set_type_codec(
        "jsonb",
        encoder=lambda value: orjson.dumps(value).decode(),
        decoder=orjson.loads,
        schema="pg_catalog",
    )


async def init_database_pool(settings: Settings) -> Pool:
    """Initialize the PostgreSQL connection pool.

    Should be called during application startup (lifespan).
    """
    global _pool  # noqa: PLW0603

    logger.info(
        "Initializing database connection pool",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
    )

    _pool = await asyncpg.create_pool(
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        user=settings.database.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=settings.database.ssl if settings.database.ssl else None,
        init=_init_connection,
    )

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        logger.info("Database connection established successfully")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        raise

    return _pool


async def ensure_schema(pool: Pool, schema: str) -> None:
    """Create the cart table and indexes if they do not exist.

    One row per owner; share tokens are unique among shared carts so a
    token resolves to at most one cart.
    """
    schema = quote_schema(schema)
    statements = (
        f"CREATE SCHEMA IF NOT EXISTS {schema}",
        f"""
        CREATE TABLE IF NOT EXISTS {schema}.shopping_carts (
            id TEXT PRIMARY KEY,
            owner_id TEXT NOT NULL UNIQUE,
            owner_name TEXT,
            recipe_ids JSONB NOT NULL DEFAULT '[]'::jsonb,
            shopping_list JSONB NOT NULL,
            checked_items JSONB NOT NULL DEFAULT '[]'::jsonb,
            share_token TEXT,
            created_at TIMESTAMPTZ NOT NULL,
            updated_at TIMESTAMPTZ NOT NULL
        )
        """,
        f"""
        CREATE UNIQUE INDEX IF NOT EXISTS shopping_carts_share_token_key
            ON {schema}.shopping_carts (share_token)
            WHERE share_token IS NOT NULL
        """,
    )

    async with pool.acquire() as conn, conn.transaction():
        for statement in statements:
            await conn.execute(statement)

    logger.info("Database schema ensured", schema=schema)


async def close_database_pool() -> None:
    """Close the PostgreSQL connection pool."""
    global _pool  # noqa: PLW0603

    if _pool:
        logger.info("Closing database connection pool")
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the database connection pool.

    Raises:
        RuntimeError: If pool is not initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Check health of the database connection."""
    results: dict[str, str] = {}

    try:
        if _pool:
            async with _pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            results["database"] = "healthy"
        else:
            results["database"] = "not_initialized"
    except (asyncpg.PostgresError, OSError):
        logger.warning("Database health check failed")
        results["database"] = "unhealthy"

    return results
