"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserOut,
)
from app.schemas.comment import CommentCreateRequest, CommentOut
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.contact import ContactOut, ContactRequest
from app.schemas.health import HealthResponse
from app.schemas.post import PostCreateRequest, PostOut, PostUpdateRequest

__all__ = [
    "AuthResponse",
    "CommentCreateRequest",
    "CommentOut",
    "ContactOut",
    "ContactRequest",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PostCreateRequest",
    "PostOut",
    "PostUpdateRequest",
    "RegisterRequest",
    "UserOut",
]
