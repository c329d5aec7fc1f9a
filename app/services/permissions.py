"""Ownership and draft-visibility policy shared by the post and comment handlers."""

import logging

from sqlalchemy import or_
from sqlalchemy.orm import Query

from app.core.errors import ForbiddenError
from app.models import Post, User

logger = logging.getLogger(__name__)


def can_mutate(account: User, resource_owner_id: object) -> bool:
    """True if account owns the resource or is an administrator."""
    if account.is_admin:
        return True
    return str(resource_owner_id) == str(account.id)


def ensure_can_mutate(
    account: User,
    resource_owner_id: object,
    message: str = "You can only modify your own content",
) -> None:
    """Raise ForbiddenError unless can_mutate allows the action."""
    if can_mutate(account, resource_owner_id):
        return
    logger.warning(
        "Ownership check failed: user=%s owner=%s", account.id, resource_owner_id
    )
    raise ForbiddenError(message)


def filter_visible_posts(query: Query, viewer: User | None) -> Query:
    """Restrict a query joined on Post to what the viewer may read.

    Drafts are visible only to their author and to administrators.
    """
    if viewer is not None and viewer.is_admin:
        return query
    if viewer is None:
        return query.filter(Post.published.is_(True))
    return query.filter(or_(Post.published.is_(True), Post.author_id == viewer.id))
