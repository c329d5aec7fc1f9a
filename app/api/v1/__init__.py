"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, auth, comments, contact, health, posts
from app.schemas.common import ErrorResponse

# Failures are rendered by the handlers in app.main with this body.
ERROR_RESPONSES = {
    code: {"model": ErrorResponse, "description": description}
    for code, description in (
        (400, "Business rule violated"),
        (401, "Missing, invalid or expired token"),
        (403, "Not the owner or not an administrator"),
        (404, "Resource not found"),
        (500, "Server error"),
    )
}

router = APIRouter(responses=ERROR_RESPONSES)
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/auth/admin", tags=["admin"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
