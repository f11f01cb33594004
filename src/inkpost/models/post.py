"""SQLAlchemy models for blog posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpost.db.session import Base
from inkpost.db.time import TimestampMixin, utcnow

if TYPE_CHECKING:
    from inkpost.models.user import User


class Post(TimestampMixin, Base):
    """Primary content entity written by users.

    Listings page through posts by ``created_at`` and use ``id`` as the
    keyset cursor, so ids are expected to grow with creation time.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # File name inside the public posts folder.
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    like_count: Mapped[int] = mapped_column(default=0, nullable=False)
    comment_count: Mapped[int] = mapped_column(default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    author: Mapped[User] = relationship("User", back_populates="posts", lazy="joined")
