"""Shared API dependencies for authentication and data access."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inkpost.core.security import InvalidTokenError, decode_token
from inkpost.db.session import get_db
from inkpost.models import User
from inkpost.repositories.post_repo import PostRepository
from inkpost.repositories.user_repo import UserRepository
from inkpost.services.files import FileStager, get_file_stager

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)]


def get_post_repository(db: SessionDep) -> PostRepository:
    """Return a post repository bound to the request session."""
    return PostRepository(db)


def get_user_repository(db: SessionDep) -> UserRepository:
    """Return a user repository bound to the request session."""
    return UserRepository(db)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
FileStagerDep = Annotated[FileStager, Depends(get_file_stager)]


def get_current_user(credentials: BearerDep, users: UserRepoDep) -> User:
    """Get the current authenticated user from an access token.

    Args:
        credentials: HTTP Bearer token credentials
        users: User repository

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        payload = decode_token(credentials.credentials, "access")
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err

    user = users.get_by_email(payload["sub"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
