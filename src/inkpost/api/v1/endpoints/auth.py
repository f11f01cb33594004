"""Authentication endpoints for the Inkpost API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from inkpost.api.v1.dependencies import BearerDep, UserRepoDep
from inkpost.core.security import InvalidTokenError
from inkpost.schemas.user import (
    AccessTokenResponse,
    LoginRequest,
    RefreshTokenResponse,
    RegisterRequest,
    TokenPair,
)
from inkpost.services import auth_service
from inkpost.services.auth_service import DuplicateUserError, InvalidCredentialsError

router = APIRouter(prefix="/auth", tags=["authentication"])


def _rotate(credentials: BearerDep, *, is_refresh: bool) -> str:
    try:
        return auth_service.rotate_token(credentials.credentials, is_refresh=is_refresh)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err


@router.post("/register/email", response_model=TokenPair, status_code=status.HTTP_201_CREATED)
async def register_email(payload: RegisterRequest, users: UserRepoDep) -> TokenPair:
    """Register a new user and return a token pair.

    Raises:
        HTTPException: 400 if the nickname or email is already taken.
    """
    try:
        tokens = auth_service.register_with_email(
            users,
            nickname=payload.nickname,
            email=payload.email,
            password=payload.password,
        )
    except DuplicateUserError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(err),
        ) from err
    return TokenPair(**tokens)


@router.post("/login/email", response_model=TokenPair)
async def login_email(payload: LoginRequest, users: UserRepoDep) -> TokenPair:
    """Exchange an email and password for a token pair."""
    try:
        tokens = auth_service.login_with_email(
            users,
            email=payload.email,
            password=payload.password,
        )
    except InvalidCredentialsError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err
    return TokenPair(**tokens)


@router.post("/token/access", response_model=AccessTokenResponse)
async def rotate_access_token(credentials: BearerDep) -> AccessTokenResponse:
    """Issue a new access token from a refresh token."""
    return AccessTokenResponse(access_token=_rotate(credentials, is_refresh=False))


@router.post("/token/refresh", response_model=RefreshTokenResponse)
async def rotate_refresh_token(credentials: BearerDep) -> RefreshTokenResponse:
    """Issue a new refresh token from a refresh token."""
    return RefreshTokenResponse(refresh_token=_rotate(credentials, is_refresh=True))
