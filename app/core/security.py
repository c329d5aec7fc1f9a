"""Password hashing and JWT issuance/verification for authentication."""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.config import settings

if TYPE_CHECKING:
    from app.core.config import Settings

# Min/max lengths for account input validation.
NAME_MAX_LEN = 100
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


def _encode_secret(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Each call uses a fresh random salt."""
    if not plain_password:
        raise ValueError("Password must be a non-empty string")
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(
        _encode_secret(plain_password), bcrypt.gensalt(rounds=cost)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Returns False on any mismatch."""
    if not plain_password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_encode_secret(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def _dummy_hash() -> str:
    return hash_password(uuid.uuid4().hex)


def burn_password_check(plain_password: str) -> None:
    """Run one bcrypt check against a throwaway hash.

    Login calls this for unknown emails so response time does not reveal
    whether an account exists.
    """
    verify_password(plain_password or "x", _dummy_hash())


class InvalidTokenError(Exception):
    """Token is malformed, not signed with our key, or carries no subject."""

    def __init__(self, message: str = "Invalid token") -> None:
        self.message = message
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Signature is valid but the token lifetime has elapsed."""

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class TokenConfig:
    """Signing key, algorithm and lifetime for bearer tokens."""

    secret: str
    algorithm: str
    lifetime: timedelta

    @classmethod
    def from_settings(cls, s: "Settings") -> "TokenConfig":
        return cls(
            secret=s.JWT_SECRET.get_secret_value(),
            algorithm=s.JWT_ALGORITHM,
            lifetime=timedelta(minutes=s.JWT_EXPIRE_MINUTES),
        )


class TokenIssuer:
    """
    Issue and verify signed, time-bounded bearer tokens.

    Tokens are stateless: nothing is stored server-side, so a token stays
    valid until it expires. Callers re-read the account on every request.
    """

    def __init__(self, config: TokenConfig) -> None:
        if not config.secret:
            raise ValueError("Token signing secret must be set")
        self._config = config

    @property
    def lifetime(self) -> timedelta:
        return self._config.lifetime

    def issue(self, account_id: str, now: datetime | None = None) -> str:
        """Create a JWT with sub (account id), iat, exp and a unique jti."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "iat": issued_at,
            "exp": issued_at + self._config.lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(
            payload,
            self._config.secret,
            algorithm=self._config.algorithm,
        )

    def verify(self, token: str) -> str:
        """
        Validate signature and expiry; return the account id from the token.
        Raises ExpiredTokenError or InvalidTokenError.
        """
        if not token:
            raise InvalidTokenError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e!s}") from e
        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub.strip():
            raise InvalidTokenError("Invalid token payload")
        return sub


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Return the process-wide token issuer built from settings."""
    return TokenIssuer(TokenConfig.from_settings(settings))
