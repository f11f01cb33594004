"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import Cursor, UploadedImage
from .post import CursorPage, OffsetPage, PostCreate, PostResponse, PostUpdate
from .user import (
    AccessTokenResponse,
    LoginRequest,
    RefreshTokenResponse,
    RegisterRequest,
    TokenPair,
    UserResponse,
)

__all__ = [
    "Cursor", "UploadedImage",
    "CursorPage", "OffsetPage", "PostCreate", "PostResponse", "PostUpdate",
    "AccessTokenResponse", "LoginRequest", "RefreshTokenResponse",
    "RegisterRequest", "TokenPair", "UserResponse",
]
