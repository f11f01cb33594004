# src/inkpost/main.py
"""Main entry point for the Inkpost application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from inkpost.api.v1 import (
    auth_router,
    common_router,
    posts_router,
    users_router,
)
from inkpost.core.settings import settings
from inkpost.db.session import create_tables

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Create tables and upload folders before serving requests."""
    create_tables()
    settings.temp_folder_path.mkdir(parents=True, exist_ok=True)
    settings.post_image_path.mkdir(parents=True, exist_ok=True)
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Inkpost API",
    description="Blog posts, users and image uploads",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(common_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Inkpost API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inkpost.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
