"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Cursor(BaseModel):
    """Keyset pagination cursor returned by list endpoints."""

    after: int | None = Field(None, description="Id of the last record on this page.")


class UploadedImage(BaseModel):
    """Result of staging an uploaded image in the temporary folder."""

    file_name: str = Field(..., alias="fileName", description="Name of the staged file.")

    model_config = ConfigDict(populate_by_name=True)
