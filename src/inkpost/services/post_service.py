"""Service-level helpers for reading and writing posts."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from inkpost.core.settings import settings
from inkpost.models.post import Post
from inkpost.repositories.post_repo import PostRepository
from inkpost.services.files import FileStager
from inkpost.services.pagination import (
    CursorPageResult,
    OffsetPageResult,
    paginate,
    parse_pagination_query,
)

logger = logging.getLogger(__name__)

POSTS_PATH = "posts"
RANDOM_POST_COUNT = 100


class PostNotFoundError(LookupError):
    """Raised when a post id does not match any stored post."""

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


def paginate_posts(
    repo: PostRepository,
    query: Mapping[str, str] | Iterable[tuple[str, str]],
    *,
    base_url: str | None = None,
    path: str = POSTS_PATH,
) -> CursorPageResult[Post] | OffsetPageResult[Post]:
    """List posts in page mode or keyset mode depending on ``query``.

    ``base_url`` and ``path`` locate the listing for next-page links;
    ``base_url`` defaults to the configured ``protocol://host``.
    """
    request = parse_pagination_query(query)
    return paginate(
        request,
        repo,
        base_url=base_url if base_url is not None else settings.base_url,
        path=path,
    )


def get_post(repo: PostRepository, post_id: int) -> Post:
    """Return a post or raise :class:`PostNotFoundError`."""
    post = repo.get_by_id(post_id)
    if post is None:
        raise PostNotFoundError(post_id)
    return post


def create_post(
    repo: PostRepository,
    *,
    author_id: int,
    title: str,
    content: str,
    image: str | None = None,
    stager: FileStager | None = None,
) -> Post:
    """Create a post for ``author_id`` with zeroed counters.

    When ``image`` names a staged upload it is moved into permanent storage
    before the post is written.

    Raises:
        ImageNotFoundError: If ``image`` is not present in the temp folder.
    """
    if image:
        (stager or FileStager()).promote(image)

    post = Post(
        author_id=author_id,
        title=title,
        content=content,
        image=image or None,
        like_count=0,
        comment_count=0,
    )
    post = repo.save(post)
    logger.info("Post %s created by user %s", post.id, author_id)
    return post


def update_post(
    repo: PostRepository,
    post_id: int,
    *,
    title: str | None = None,
    content: str | None = None,
) -> Post:
    """Apply the provided fields to an existing post."""
    post = get_post(repo, post_id)
    if title:
        post.title = title
    if content:
        post.content = content
    post = repo.save(post)
    logger.info("Post %s updated", post_id)
    return post


def delete_post(repo: PostRepository, post_id: int) -> int:
    """Delete a post and return its id."""
    get_post(repo, post_id)
    repo.delete(post_id)
    logger.info("Post %s deleted", post_id)
    return post_id


def generate_posts(repo: PostRepository, author_id: int, count: int = RANDOM_POST_COUNT) -> None:
    """Create ``count`` placeholder posts for ``author_id``."""
    for i in range(count):
        create_post(
            repo,
            author_id=author_id,
            title=f"Generated post {i}",
            content=f"Generated post {i}",
        )
