"""ORM models for blog posts and the post_likes association."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow

POST_CATEGORIES = (
    "Technology",
    "React",
    "CSS",
    "JavaScript",
    "Node.js",
    "MongoDB",
    "Other",
)

# Composite primary key: a user likes a given post at most once.
post_likes = Table(
    "post_likes",
    Base.metadata,
    Column(
        "post_id",
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)


class Post(Base):
    """Blog post owned by its author."""

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category = Column(String(32), nullable=False, default="Other", index=True)
    tags = Column(JSON, nullable=False, default=list)
    published = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)
    image = Column(String(2048), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author = relationship("User", back_populates="posts")
    comments = relationship(
        "Comment", back_populates="post", cascade="all, delete-orphan"
    )
    liked_by = relationship(
        "User", secondary=post_likes, back_populates="liked_posts"
    )

    @property
    def likes_count(self) -> int:
        return len(self.liked_by)
