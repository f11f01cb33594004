"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Schema for email registration."""

    nickname: str = Field(..., min_length=1, max_length=20, description="Public nickname")
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., min_length=3, max_length=128, description="Plain password")


class LoginRequest(BaseModel):
    """Schema for email login submissions."""

    email: EmailStr
    password: str


class TokenPair(BaseModel):
    """Access and refresh tokens issued after a successful login."""

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")

    model_config = ConfigDict(populate_by_name=True)


class AccessTokenResponse(BaseModel):
    """Freshly rotated access token."""

    access_token: str = Field(..., alias="accessToken")

    model_config = ConfigDict(populate_by_name=True)


class RefreshTokenResponse(BaseModel):
    """Freshly rotated refresh token."""

    refresh_token: str = Field(..., alias="refreshToken")

    model_config = ConfigDict(populate_by_name=True)


class UserResponse(BaseModel):
    """Public view of a user; never exposes the password hash."""

    id: int
    nickname: str
    email: str
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
