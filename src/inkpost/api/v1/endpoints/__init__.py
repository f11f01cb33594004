"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .common import router as common_router
from .posts import router as posts_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "common_router",
    "posts_router",
    "users_router",
]
