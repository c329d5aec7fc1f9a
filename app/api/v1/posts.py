"""Posts endpoints: public listing and reading, owner/admin mutation, likes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, get_optional_user
from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationFailureError
from app.models import Post, User
from app.schemas.common import MessageResponse
from app.schemas.post import (
    Category,
    LikeData,
    LikeResponse,
    PostCreateRequest,
    PostListResponse,
    PostOut,
    PostResponse,
    PostUpdateRequest,
)
from app.services.permissions import (
    can_mutate,
    ensure_can_mutate,
    filter_visible_posts,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_SEARCH_LEN = 200


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _get_post(db: Session, post_id: str) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


@router.get("", response_model=PostListResponse)
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
    category: Category | None = None,
    published: bool | None = None,
    search: Annotated[str | None, Query(max_length=MAX_SEARCH_LEN)] = None,
) -> PostListResponse:
    """
    List posts newest first.

    Optional filters: category, published, and a case-insensitive search over
    title and content.
    """
    query = filter_visible_posts(db.query(Post), viewer)
    if category:
        query = query.filter(Post.category == category)
    if published is not None:
        query = query.filter(Post.published.is_(published))
    if search and search.strip():
        pattern = _like_pattern(search.strip())
        query = query.filter(
            or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.content.ilike(pattern, escape="\\"),
            )
        )
    posts = query.order_by(Post.created_at.desc()).all()
    return PostListResponse(count=len(posts), data=[PostOut.from_post(p) for p in posts])


@router.get("/category/{category}", response_model=PostListResponse)
def list_posts_by_category(
    category: Category,
    db: Annotated[Session, Depends(get_db)],
) -> PostListResponse:
    """Published posts in one category."""
    posts = (
        db.query(Post)
        .filter(Post.category == category, Post.published.is_(True))
        .order_by(Post.created_at.desc())
        .all()
    )
    return PostListResponse(count=len(posts), data=[PostOut.from_post(p) for p in posts])


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> PostResponse:
    """Return one post and count the view."""
    post = _get_post(db, post_id)
    if not post.published and (viewer is None or not can_mutate(viewer, post.author_id)):
        raise NotFoundError("Post not found")
    post.views += 1
    db.commit()
    db.refresh(post)
    return PostResponse(data=PostOut.from_post(post))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    post = Post(
        title=body.title.strip(),
        content=body.content,
        author_id=current_user.id,
        category=body.category,
        tags=[t.strip() for t in body.tags if t.strip()],
        published=body.published,
        image=body.image,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post id=%s created by user=%s", post.id, current_user.id)
    return PostResponse(message="Post created successfully", data=PostOut.from_post(post))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    body: PostUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    """Partially update a post. Only its author or an administrator may do this."""
    post = _get_post(db, post_id)
    ensure_can_mutate(current_user, post.author_id, "You can only edit your own posts")
    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    if "tags" in updates:
        updates["tags"] = [t.strip() for t in updates["tags"] if t.strip()]
    for field, value in updates.items():
        setattr(post, field, value)
    db.commit()
    db.refresh(post)
    return PostResponse(message="Post updated successfully", data=PostOut.from_post(post))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a post with its comments and likes. Author or administrator only."""
    post = _get_post(db, post_id)
    ensure_can_mutate(current_user, post.author_id, "You can only delete your own posts")
    db.delete(post)
    db.commit()
    logger.info("Post id=%s deleted by user=%s", post_id, current_user.id)
    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/like", response_model=LikeResponse)
def like_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> LikeResponse:
    post = _get_post(db, post_id)
    if current_user in post.liked_by:
        raise ValidationFailureError("You already liked this post")
    post.liked_by.append(current_user)
    try:
        db.commit()
    except IntegrityError as e:
        # Concurrent like from the same user hit the post_likes primary key.
        db.rollback()
        raise ValidationFailureError("You already liked this post") from e
    db.refresh(post)
    return LikeResponse(
        message="Post liked successfully", data=LikeData(likes_count=post.likes_count)
    )


@router.delete("/{post_id}/like", response_model=LikeResponse)
def unlike_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> LikeResponse:
    post = _get_post(db, post_id)
    if current_user not in post.liked_by:
        raise ValidationFailureError("You haven't liked this post")
    post.liked_by.remove(current_user)
    db.commit()
    db.refresh(post)
    return LikeResponse(
        message="Post unliked successfully", data=LikeData(likes_count=post.likes_count)
    )
