"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from inkpost.models.post import Post
from inkpost.services.pagination import IdBound, SortDirection

__all__ = ["PostRepository"]


def _ordered(stmt: Select, order: SortDirection) -> Select:
    # Ties on created_at fall back to id so keyset pages stay stable.
    if order is SortDirection.DESC:
        return stmt.order_by(Post.created_at.desc(), Post.id.desc())
    return stmt.order_by(Post.created_at.asc(), Post.id.asc())


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.execute(select(Post).where(Post.id == post_id)).scalars().first()

    def find(
        self,
        *,
        bound: IdBound | None,
        order: SortDirection,
        limit: int,
    ) -> Sequence[Post]:
        """Return up to ``limit`` posts past ``bound`` in ``order``."""
        stmt = select(Post)
        if bound is not None:
            if bound.less_than is not None:
                stmt = stmt.where(Post.id < bound.less_than)
            elif bound.more_than is not None:
                stmt = stmt.where(Post.id > bound.more_than)
        stmt = _ordered(stmt, order).limit(limit)
        return list(self.session.execute(stmt).scalars())

    def find_and_count(
        self,
        *,
        skip: int,
        limit: int,
        order: SortDirection,
    ) -> tuple[Sequence[Post], int]:
        """Return one offset page of posts and the total number of posts."""
        stmt = _ordered(select(Post), order).offset(skip).limit(limit)
        posts = list(self.session.execute(stmt).scalars())
        total = self.session.execute(select(func.count()).select_from(Post)).scalar_one()
        return posts, int(total)

    def save(self, post: Post) -> Post:
        """Insert or update ``post`` and return the refreshed instance."""
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post_id: int) -> None:
        """Delete a post by identifier; missing rows are ignored."""
        post = self.get_by_id(post_id)
        if post is None:
            return
        self.session.delete(post)
        self.session.commit()
