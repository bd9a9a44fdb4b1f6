"""Cart repositories."""

from recipe_cart.database.repositories.memory import InMemoryCartRepository
from recipe_cart.database.repositories.postgres import PostgresCartRepository
from recipe_cart.database.repositories.protocol import CartRepository


__all__ = ["CartRepository", "InMemoryCartRepository", "PostgresCartRepository"]
