"""Application lifespan events."""

from recipe_cart.core.events.lifespan import lifespan


__all__ = ["lifespan"]
