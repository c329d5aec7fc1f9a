"""JWT register/login, profile endpoints, and auth dependencies (get_current_user, require_admin)."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthWiringError, ForbiddenError, UnauthenticatedError
from app.core.security import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenIssuer,
    get_token_issuer,
)
from app.models import User
from app.models.user import ROLE_ADMIN
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserOut,
    UserResponse,
)
from app.schemas.common import MessageResponse
from app.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _resolve_account(token: str, db: Session, issuer: TokenIssuer) -> User:
    try:
        account_id = issuer.verify(token)
    except ExpiredTokenError:
        raise UnauthenticatedError("Not authorized. Token expired.")
    except InvalidTokenError:
        raise UnauthenticatedError("Not authorized. Invalid token.")
    user = db.get(User, account_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> User:
    """
    Dependency: require a valid Bearer JWT and return the current user.

    The resolved account is also stored on request.state.current_user for the
    rest of the request. Raises 401 if the token is missing, invalid, expired,
    or belongs to an account that no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Not authorized. Please login.")
    user = _resolve_account(credentials.credentials, db, issuer)
    request.state.current_user = user
    return user


def get_optional_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> User | None:
    """Like get_current_user, but anonymous or bad-token requests get None instead of 401."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        user = _resolve_account(credentials.credentials, db, issuer)
    except UnauthenticatedError:
        return None
    request.state.current_user = user
    return user


def require_role(role: str) -> Callable[[Request], User]:
    """
    Build a dependency that admits only accounts with the given role.

    Must be declared after get_current_user on the route; it reads the account
    from request.state and treats its absence as a wiring bug (500).
    """

    def dependency(request: Request) -> User:
        user = getattr(request.state, "current_user", None)
        if user is None:
            logger.error(
                "Role gate '%s' on %s ran without an authentication gate",
                role,
                request.url.path,
            )
            raise AuthWiringError("Server error")
        if user.role != role:
            logger.warning(
                "Access denied: user=%s role=%s required=%s path=%s",
                user.id,
                user.role,
                role,
                request.url.path,
            )
            raise ForbiddenError(f"Access denied. {role.capitalize()} privileges required.")
        return user

    dependency.__name__ = f"require_{role}"
    return dependency


require_admin = require_role(ROLE_ADMIN)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthResponse:
    """Create an account and log it in. Duplicate email returns 400."""
    user = accounts.register(db, body.name, body.email, body.password)
    return AuthResponse(
        message="User registered successfully",
        token=issuer.issue(user.id),
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = accounts.authenticate(db, body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=issuer.issue(user.id),
        user=UserOut.model_validate(user),
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    return UserResponse(data=UserOut.model_validate(current_user))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    user = accounts.update_profile(
        db, current_user, name=body.name, bio=body.bio, avatar=body.avatar
    )
    return UserResponse(
        message="Profile updated successfully", data=UserOut.model_validate(user)
    )


@router.put("/password", response_model=MessageResponse)
def update_password(
    body: PasswordChangeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Change the password. Existing tokens stay valid until they expire."""
    accounts.change_password(db, current_user, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")
