"""Request/response schemas for posts and likes."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.models import Post
from app.schemas.common import ApiModel

Category = Literal[
    "Technology", "React", "CSS", "JavaScript", "Node.js", "MongoDB", "Other"
]


class AuthorSummary(ApiModel):
    id: str
    name: str
    avatar: str = ""


class PostCreateRequest(ApiModel):
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=10)
    category: Category = "Other"
    tags: list[str] = Field(default_factory=list)
    published: bool = False
    image: str = Field(default="", max_length=2048)


class PostUpdateRequest(ApiModel):
    """Partial update; only fields present in the body are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    content: str | None = Field(default=None, min_length=10)
    category: Category | None = None
    tags: list[str] | None = None
    published: bool | None = None
    image: str | None = Field(default=None, max_length=2048)


class PostOut(ApiModel):
    id: str
    title: str
    content: str
    author: AuthorSummary
    category: str
    tags: list[str]
    published: bool
    views: int
    image: str
    likes: list[str] = Field(default_factory=list, description="Ids of users who liked the post")
    likes_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_post(cls, post: Post) -> "PostOut":
        likes = [u.id for u in post.liked_by]
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=AuthorSummary.model_validate(post.author),
            category=post.category,
            tags=list(post.tags or []),
            published=post.published,
            views=post.views,
            image=post.image,
            likes=likes,
            likes_count=len(likes),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostResponse(ApiModel):
    success: bool = True
    message: str | None = None
    data: PostOut


class PostListResponse(ApiModel):
    success: bool = True
    count: int
    data: list[PostOut]


class LikeData(ApiModel):
    likes_count: int


class LikeResponse(ApiModel):
    success: bool = True
    message: str
    data: LikeData
