"""Email registration, login and token rotation."""
from __future__ import annotations

import logging

from inkpost.core.security import (
    create_token,
    decode_token,
    hash_password,
    verify_password,
)
from inkpost.models.user import User
from inkpost.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class DuplicateUserError(ValueError):
    """Raised when a nickname or email is already registered."""


class InvalidCredentialsError(ValueError):
    """Raised when an email/password pair does not match a user."""


def issue_tokens(user: User) -> dict[str, str]:
    """Return a fresh access/refresh token pair for ``user``."""
    return {
        "access_token": create_token(user.email, "access", user_id=user.id),
        "refresh_token": create_token(user.email, "refresh", user_id=user.id),
    }


def register_with_email(
    repo: UserRepository,
    *,
    nickname: str,
    email: str,
    password: str,
) -> dict[str, str]:
    """Create a user and log them in."""
    if repo.exists(nickname=nickname):
        raise DuplicateUserError("Nickname is already in use")
    if repo.exists(email=email):
        raise DuplicateUserError("Email is already registered")

    user = repo.create(nickname=nickname, email=email, password_hash=hash_password(password))
    logger.info("Registered user %s", user.id)
    return issue_tokens(user)


def authenticate(repo: UserRepository, *, email: str, password: str) -> User:
    """Return the user matching ``email`` and ``password``."""
    user = repo.get_by_email(email)
    if user is None or not verify_password(password, user.password):
        logger.warning("Rejected login for %s", email)
        raise InvalidCredentialsError("Invalid email or password")
    return user


def login_with_email(repo: UserRepository, *, email: str, password: str) -> dict[str, str]:
    """Check credentials and return a token pair."""
    return issue_tokens(authenticate(repo, email=email, password=password))


def rotate_token(refresh_token: str, *, is_refresh: bool) -> str:
    """Exchange a refresh token for a new access or refresh token.

    Raises:
        InvalidTokenError: If ``refresh_token`` is not a valid refresh token.
    """
    payload = decode_token(refresh_token, "refresh")
    return create_token(
        payload["sub"],
        "refresh" if is_refresh else "access",
        user_id=payload.get("uid"),
    )
