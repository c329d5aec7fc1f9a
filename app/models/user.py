"""ORM model for user accounts (the credential store)."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)

DEFAULT_AVATAR = "/images/default-avatar.png"


class User(Base):
    """
    Account used for JWT authentication and role-based access control.

    email is stored lower-cased and is unique; role is 'user' or 'admin'.
    Deleting a user deletes the posts, comments and likes they authored.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    bio = Column(String(500), nullable=False, default="")
    avatar = Column(String(1024), nullable=False, default=DEFAULT_AVATAR)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    posts = relationship(
        "Post", back_populates="author", cascade="all, delete-orphan"
    )
    comments = relationship(
        "Comment", back_populates="author", cascade="all, delete-orphan"
    )
    liked_posts = relationship(
        "Post", secondary="post_likes", back_populates="liked_by"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
