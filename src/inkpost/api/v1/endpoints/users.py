"""User-related endpoints for the Inkpost API."""

from fastapi import APIRouter

from inkpost.api.v1.dependencies import CurrentUserDep, UserRepoDep
from inkpost.models import User
from inkpost.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(users: UserRepoDep) -> list[User]:
    """List all registered users."""
    return users.list_all()


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated caller."""
    return current_user
