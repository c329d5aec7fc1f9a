"""Account lifecycle: registration, login, profile, password and role management."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UnauthenticatedError, ValidationFailureError
from app.core.security import burn_password_check, hash_password, verify_password
from app.models import Comment, ContactMessage, Post, User
from app.models.user import ROLE_ADMIN, ROLE_USER, ROLES

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User already exists with this email"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user(db: Session, user_id: str) -> User:
    """Return the user or raise NotFoundError."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def register(db: Session, name: str, email: str, password: str) -> User:
    """
    Create a standard account with a hashed password.

    The pre-check gives a friendly error; two concurrent registrations with
    the same email are settled by the unique index on users.email.
    """
    email = normalize_email(email)
    if get_user_by_email(db, email) is not None:
        raise ValidationFailureError(DUPLICATE_EMAIL_MESSAGE)
    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=ROLE_USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationFailureError(DUPLICATE_EMAIL_MESSAGE) from e
    db.refresh(user)
    logger.info("Registered user id=%s email=%s", user.id, user.email)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the account matching email and password or raise UnauthenticatedError."""
    user = get_user_by_email(db, email)
    if user is None:
        burn_password_check(password)
        logger.info("Login failed: unknown email=%s", normalize_email(email))
        raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password for user id=%s", user.id)
        raise UnauthenticatedError(INVALID_CREDENTIALS_MESSAGE)
    logger.info("Login succeeded for user id=%s", user.id)
    return user


def update_profile(
    db: Session,
    user: User,
    name: str | None = None,
    bio: str | None = None,
    avatar: str | None = None,
) -> User:
    if name is not None:
        user.name = name.strip()
    if bio is not None:
        user.bio = bio
    if avatar is not None:
        user.avatar = avatar
    db.commit()
    db.refresh(user)
    return user


def change_password(
    db: Session, user: User, current_password: str, new_password: str
) -> None:
    """Replace the password after checking the current one."""
    if not verify_password(current_password, user.password_hash):
        raise UnauthenticatedError("Current password is incorrect")
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed for user id=%s", user.id)


def _count_admins(db: Session) -> int:
    return db.query(func.count(User.id)).filter(User.role == ROLE_ADMIN).scalar() or 0


def _is_last_admin(db: Session, user: User) -> bool:
    return user.role == ROLE_ADMIN and _count_admins(db) <= 1


def set_role(db: Session, actor: User, target: User, role: str) -> User:
    """Change target's role. The last remaining administrator cannot be demoted."""
    if role not in ROLES:
        raise ValidationFailureError(f"Role must be one of: {', '.join(ROLES)}")
    if role != ROLE_ADMIN and _is_last_admin(db, target):
        raise ValidationFailureError("Cannot demote the last remaining administrator")
    previous = target.role
    target.role = role
    db.commit()
    db.refresh(target)
    logger.info(
        "Role change by admin=%s: user=%s %s -> %s", actor.id, target.id, previous, role
    )
    return target


def delete_account(db: Session, actor: User, target: User) -> None:
    """Delete target and, through ORM cascades, its posts, comments and likes."""
    if _is_last_admin(db, target):
        raise ValidationFailureError("Cannot delete the last remaining administrator")
    target_id = target.id
    db.delete(target)
    db.commit()
    logger.info("User id=%s deleted by admin=%s", target_id, actor.id)


def admin_stats(db: Session) -> dict[str, int]:
    """Totals for the admin dashboard."""
    return {
        "total_users": db.query(func.count(User.id)).scalar() or 0,
        "total_admins": _count_admins(db),
        "total_posts": db.query(func.count(Post.id)).scalar() or 0,
        "published_posts": db.query(func.count(Post.id))
        .filter(Post.published.is_(True))
        .scalar()
        or 0,
        "total_comments": db.query(func.count(Comment.id)).scalar() or 0,
        "total_messages": db.query(func.count(ContactMessage.id)).scalar() or 0,
        "unread_messages": db.query(func.count(ContactMessage.id))
        .filter(ContactMessage.status == "new")
        .scalar()
        or 0,
    }
