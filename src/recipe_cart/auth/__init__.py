"""Authentication for owner-scoped routes."""

from recipe_cart.auth.dependencies import CurrentUser, get_current_user


__all__ = ["CurrentUser", "get_current_user"]
