"""Comments endpoints: public reading, authenticated posting, owner/admin deletion."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, get_optional_user
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.models import Comment, Post, User
from app.schemas.comment import (
    CommentCreateRequest,
    CommentListResponse,
    CommentOut,
    CommentResponse,
    CommentWithPostListResponse,
    CommentWithPostOut,
)
from app.schemas.common import MessageResponse
from app.services.permissions import (
    can_mutate,
    ensure_can_mutate,
    filter_visible_posts,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_visible_post(db: Session, post_id: str, viewer: User | None) -> Post:
    """Fetch a post the viewer may see; drafts of other authors read as missing."""
    post = db.get(Post, post_id)
    if post is None or (
        not post.published and (viewer is None or not can_mutate(viewer, post.author_id))
    ):
        raise NotFoundError("Post not found")
    return post


@router.get("", response_model=CommentWithPostListResponse)
def list_comments(
    db: Annotated[Session, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> CommentWithPostListResponse:
    """All comments, newest first, with the title of their post."""
    query = db.query(Comment).join(Post, Comment.post_id == Post.id)
    query = filter_visible_posts(query, viewer)
    comments = query.order_by(Comment.created_at.desc()).all()
    return CommentWithPostListResponse(
        count=len(comments),
        data=[CommentWithPostOut.model_validate(c) for c in comments],
    )


@router.get("/post/{post_id}", response_model=CommentListResponse)
def list_comments_for_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> CommentListResponse:
    post = _get_visible_post(db, post_id, viewer)
    comments = (
        db.query(Comment)
        .filter(Comment.post_id == post.id)
        .order_by(Comment.created_at.desc())
        .all()
    )
    return CommentListResponse(
        count=len(comments), data=[CommentOut.model_validate(c) for c in comments]
    )


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    body: CommentCreateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CommentResponse:
    post = _get_visible_post(db, body.post_id, current_user)
    comment = Comment(content=body.content, author_id=current_user.id, post_id=post.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return CommentResponse(
        message="Comment added successfully", data=CommentOut.model_validate(comment)
    )


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a comment. Its author or an administrator only."""
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    ensure_can_mutate(
        current_user, comment.author_id, "You can only delete your own comments"
    )
    db.delete(comment)
    db.commit()
    logger.info("Comment id=%s deleted by user=%s", comment_id, current_user.id)
    return MessageResponse(message="Comment deleted successfully")
