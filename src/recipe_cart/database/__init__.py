"""PostgreSQL access: connection pool and cart repositories."""

from recipe_cart.database.connection import (
    check_database_health,
    close_database_pool,
    ensure_schema,
    get_database_pool,
    init_database_pool,
)


__all__ = [
    "check_database_health",
    "close_database_pool",
    "ensure_schema",
    "get_database_pool",
    "init_database_pool",
]
