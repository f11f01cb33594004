"""SQLAlchemy models for registered users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpost.db.session import Base
from inkpost.db.time import TimestampMixin

if TYPE_CHECKING:
    from inkpost.models.post import Post

ROLE_USER = "user"


class User(TimestampMixin, Base):
    """Account identified by email, authoring zero or more posts."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nickname: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # bcrypt hash, never the plain password.
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)

    posts: Mapped[list[Post]] = relationship("Post", back_populates="author")
