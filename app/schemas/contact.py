"""Request/response schemas for the contact form."""

from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import EMAIL_PATTERN, ApiModel


class ContactRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=10, max_length=5000)

    @field_validator("name", "subject", "email", mode="before")
    @classmethod
    def strip(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class ContactOut(ApiModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime | None = None


class ContactResponse(ApiModel):
    success: bool = True
    message: str | None = None
    data: ContactOut


class ContactListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[ContactOut]
