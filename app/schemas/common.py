"""Shared schema base and response envelopes."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Deliberately loose; mirrors what the client-side form validates.
EMAIL_PATTERN = r"^\S+@\S+\.\S+$"


class ApiModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(ApiModel):
    """Envelope for operations that return no data."""

    success: bool = True
    message: str


class ErrorResponse(ApiModel):
    """Body of every error response."""

    success: bool = False
    message: str = Field(..., description="Human-readable error message")
