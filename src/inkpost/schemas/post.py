"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from inkpost.schemas.common import Cursor
from inkpost.schemas.user import UserResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, description="Post title")
    content: str = Field(..., min_length=1, description="Post body")
    image: str | None = Field(
        None,
        description="File name of an image previously uploaded to the temp folder",
    )


class PostUpdate(BaseModel):
    """Schema for partially updating a post; omitted fields are left unchanged."""

    title: str | None = Field(None, description="New title")
    content: str | None = Field(None, description="New body")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    author: UserResponse
    title: str
    content: str
    image: str | None = None
    like_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CursorPage(BaseModel):
    """Cursor-mode listing page."""

    data: list[PostResponse]
    cursor: Cursor
    count: int
    next: str | None = None


class OffsetPage(BaseModel):
    """Page-mode listing page."""

    data: list[PostResponse]
    total: int
