"""Request/response schemas for auth, profile and admin endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.schemas.common import EMAIL_PATTERN, ApiModel

Role = Literal["user", "admin"]


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class RegisterRequest(ApiModel):
    """New account details."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v) if isinstance(v, str) else v


class LoginRequest(ApiModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v) if isinstance(v, str) else v


class UserOut(ApiModel):
    """Public view of an account. Never includes the password hash."""

    id: str
    name: str
    email: str
    role: Role
    bio: str = ""
    avatar: str = ""
    created_at: datetime | None = None


class AuthResponse(ApiModel):
    """Returned by register and login: a fresh bearer token plus the account."""

    success: bool = True
    message: str
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
    user: UserOut


class UserResponse(ApiModel):
    success: bool = True
    message: str | None = None
    data: UserOut


class UsersListResponse(ApiModel):
    """Response for GET /auth/admin/users."""

    success: bool = True
    count: int
    data: list[UserOut]


class ProfileUpdateRequest(ApiModel):
    """Mutable profile fields; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LEN)
    bio: str | None = Field(default=None, max_length=500)
    avatar: str | None = Field(default=None, max_length=1024)


class PasswordChangeRequest(ApiModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class RoleUpdateRequest(ApiModel):
    role: Role


class AdminStats(ApiModel):
    total_users: int
    total_admins: int
    total_posts: int
    published_posts: int
    total_comments: int
    total_messages: int
    unread_messages: int


class AdminStatsResponse(ApiModel):
    success: bool = True
    data: AdminStats
