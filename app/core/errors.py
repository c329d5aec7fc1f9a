"""Domain errors raised by services and auth dependencies.

Each error carries the HTTP status it maps to; ``app.main`` renders them as
``{"success": false, "message": ...}``.
"""


class AppError(Exception):
    """Base class for errors that surface to API clients."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class UnauthenticatedError(AppError):
    """Missing, invalid or expired credentials, or the account no longer exists."""

    status_code = 401


class ForbiddenError(AppError):
    """Authenticated, but the role or ownership does not permit the action."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ValidationFailureError(AppError):
    """Well-formed request that breaks a business rule (e.g. duplicate email)."""

    status_code = 400


class AuthWiringError(AppError):
    """A role gate ran without an authentication gate before it on the route."""

    status_code = 500
