"""Authentication provider models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthResult(BaseModel):
    """Result of successful authentication.

    A provider-independent view of the caller. ``user_id`` is the cart
    owner key; ``user_name`` is the display name shown to people opening
    a shared cart.

    Attributes:
        user_id: Unique identifier for the authenticated user ('sub' claim).
        user_name: Display name of the user, when the provider knows it.
        roles: Role names assigned to the user.
        token_type: Type of credential that was validated (access, header, none).
        expires_at: Token expiration timestamp ('exp' claim).
        raw_claims: Original claims for debugging.
    """

    user_id: str = Field(..., description="User identifier")
    user_name: str | None = Field(default=None, description="User display name")
    roles: list[str] = Field(default_factory=list, description="User roles")
    token_type: str = Field(default="access", description="Type of validated token")
    expires_at: int | None = Field(default=None, description="Expiration timestamp")
    raw_claims: dict[str, Any] = Field(
        default_factory=dict,
        description="Original token claims",
    )

    model_config = {"frozen": True}
