"""Password hashing and JWT helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import bcrypt
from jose import JWTError, jwt

from inkpost.core.settings import settings

TokenType = Literal["access", "refresh"]


class InvalidTokenError(ValueError):
    """Raised when a bearer token is malformed, expired or of the wrong type."""


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.hash_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_token(subject: str, token_type: TokenType, *, user_id: int | None = None) -> str:
    """Create a signed JWT of ``token_type`` for ``subject``."""
    lifetime = (
        settings.refresh_token_expire_seconds
        if token_type == "refresh"
        else settings.access_token_expire_seconds
    )
    payload: dict[str, Any] = {
        "sub": subject,
        "type": token_type,
        "exp": datetime.now(UTC) + timedelta(seconds=lifetime),
    }
    if user_id is not None:
        payload["uid"] = user_id
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, expected_type: TokenType) -> dict[str, Any]:
    """Decode ``token`` and check it is an ``expected_type`` token.

    Raises:
        InvalidTokenError: If the token cannot be verified or has the wrong type.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    if payload.get("sub") is None:
        raise InvalidTokenError("Could not validate credentials")
    if payload.get("type") != expected_type:
        raise InvalidTokenError(f"Expected a {expected_type} token")
    return payload
