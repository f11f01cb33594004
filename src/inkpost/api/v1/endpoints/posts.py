"""Post-related endpoints for the Inkpost API."""

from fastapi import APIRouter, HTTPException, Request, status

from inkpost.api.v1.dependencies import CurrentUserDep, FileStagerDep, PostRepoDep
from inkpost.models import Post
from inkpost.schemas.common import Cursor
from inkpost.schemas.post import (
    CursorPage,
    OffsetPage,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from inkpost.services import post_service
from inkpost.services.files import ImageNotFoundError
from inkpost.services.pagination import OffsetPageResult
from inkpost.services.post_service import PostNotFoundError

router = APIRouter(prefix="/posts", tags=["posts"])


def _not_found(err: PostNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")


@router.get("", response_model=CursorPage | OffsetPage)
async def list_posts(request: Request, posts: PostRepoDep) -> CursorPage | OffsetPage:
    """List posts by creation time.

    Query parameters:
        take: Page size.
        order__createdAt: ``ASC`` (default) or ``DESC``.
        page: 1-based page number; switches to page mode.
        where__id__less_than / where__id__more_than: Keyset bounds.

    Returns:
        ``{data, total}`` in page mode, otherwise ``{data, cursor, count, next}``
        where ``next`` is the absolute URL of the following page or null.
    """
    result = post_service.paginate_posts(
        posts,
        request.query_params.multi_items(),
        path=request.url.path,
    )

    if isinstance(result, OffsetPageResult):
        return OffsetPage(
            data=[PostResponse.model_validate(post) for post in result.data],
            total=result.total,
        )

    return CursorPage(
        data=[PostResponse.model_validate(post) for post in result.data],
        cursor=Cursor(after=result.after),
        count=result.count,
        next=result.next_url,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, posts: PostRepoDep) -> Post:
    """Get a specific post by ID."""
    try:
        return post_service.get_post(posts, post_id)
    except PostNotFoundError as err:
        raise _not_found(err) from err


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
    stager: FileStagerDep,
) -> Post:
    """Create a new post authored by the caller.

    Raises:
        HTTPException: 400 if the referenced image was never uploaded.
    """
    try:
        return post_service.create_post(
            posts,
            author_id=current_user.id,
            title=post_data.title,
            content=post_data.content,
            image=post_data.image,
            stager=stager,
        )
    except ImageNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image file does not exist",
        ) from err


@router.post("/random")
async def create_random_posts(current_user: CurrentUserDep, posts: PostRepoDep) -> bool:
    """Generate a batch of placeholder posts for the caller."""
    post_service.generate_posts(posts, current_user.id)
    return True


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(post_id: int, post_data: PostUpdate, posts: PostRepoDep) -> Post:
    """Update the title and/or content of a post."""
    try:
        return post_service.update_post(
            posts,
            post_id,
            title=post_data.title,
            content=post_data.content,
        )
    except PostNotFoundError as err:
        raise _not_found(err) from err


@router.delete("/{post_id}")
async def delete_post(post_id: int, posts: PostRepoDep) -> int:
    """Delete a post and return its id."""
    try:
        return post_service.delete_post(posts, post_id)
    except PostNotFoundError as err:
        raise _not_found(err) from err
