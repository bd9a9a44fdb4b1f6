"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: For incoming API request bodies
    - APIResponse: For outgoing API response bodies
    - DownstreamRequest: For requests sent to the Recipe Provider
    - DownstreamResponse: For responses received from the Recipe Provider
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas; unknown fields are ignored."""

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas; only declared fields."""

    model_config = ConfigDict(
        extra="forbid",
    )


class DownstreamRequest(_BaseSchema):
    """Base class for requests sent to external services."""

    model_config = ConfigDict(
        extra="forbid",
    )


class DownstreamResponse(_BaseSchema):
    """Base class for responses received from external services.

    Extra fields are ignored so upstream additions do not break parsing.
    """

    model_config = ConfigDict(
        extra="ignore",
    )
