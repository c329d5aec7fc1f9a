"""Request/response schemas for comments."""

from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.common import ApiModel
from app.schemas.post import AuthorSummary


class CommentCreateRequest(ApiModel):
    post_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, max_length=500)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class PostSummary(ApiModel):
    id: str
    title: str


class CommentOut(ApiModel):
    id: str
    content: str
    author: AuthorSummary
    post_id: str
    created_at: datetime | None = None


class CommentWithPostOut(CommentOut):
    """Comment plus the title of the post it belongs to (for moderation lists)."""

    post: PostSummary


class CommentResponse(ApiModel):
    success: bool = True
    message: str | None = None
    data: CommentOut


class CommentListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[CommentOut]


class CommentWithPostListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[CommentWithPostOut]
