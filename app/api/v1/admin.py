"""Administrator-only user management and dashboard statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.database import get_db
from app.models import User
from app.schemas.auth import (
    AdminStats,
    AdminStatsResponse,
    RoleUpdateRequest,
    UserOut,
    UserResponse,
    UsersListResponse,
)
from app.schemas.common import MessageResponse
from app.services import accounts

# Authentication must resolve the account before the role gate reads it.
router = APIRouter(dependencies=[Depends(get_current_user), Depends(require_admin)])


@router.get("/stats", response_model=AdminStatsResponse)
def get_admin_stats(
    db: Annotated[Session, Depends(get_db)],
) -> AdminStatsResponse:
    return AdminStatsResponse(data=AdminStats(**accounts.admin_stats(db)))


@router.get("/users", response_model=UsersListResponse)
def list_users(
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users, newest first (admin only)."""
    users = db.query(User).order_by(User.created_at.desc()).all()
    return UsersListResponse(
        count=len(users), data=[UserOut.model_validate(u) for u in users]
    )


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    return UserResponse(data=UserOut.model_validate(accounts.get_user(db, user_id)))


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    admin: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete an account together with its posts, comments and likes."""
    target = accounts.get_user(db, user_id)
    accounts.delete_account(db, admin, target)
    return MessageResponse(message="User deleted successfully")


@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: str,
    body: RoleUpdateRequest,
    admin: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Set a user's role. The change applies on that user's next request."""
    target = accounts.get_user(db, user_id)
    user = accounts.set_role(db, admin, target, body.role)
    return UserResponse(
        message=f"User role updated to {user.role}", data=UserOut.model_validate(user)
    )
