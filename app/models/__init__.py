"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.comment import Comment
from app.models.contact import ContactMessage
from app.models.post import Post, post_likes
from app.models.user import User

__all__ = ["Base", "Comment", "ContactMessage", "Post", "User", "post_likes"]
