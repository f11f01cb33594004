"""Data access helpers for working with users."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkpost.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        """Return a user by email address."""
        return self.session.execute(select(User).where(User.email == email)).scalars().first()

    def exists(self, *, email: str | None = None, nickname: str | None = None) -> bool:
        """Return True when a user with the given email or nickname exists."""
        stmt = select(User.id)
        if email is not None:
            stmt = stmt.where(User.email == email)
        if nickname is not None:
            stmt = stmt.where(User.nickname == nickname)
        return self.session.execute(stmt.limit(1)).first() is not None

    def list_all(self) -> list[User]:
        """Return every user ordered by identifier."""
        return list(self.session.execute(select(User).order_by(User.id)).scalars())

    def create(self, *, nickname: str, email: str, password_hash: str) -> User:
        """Insert a new user and return the persisted ORM instance."""
        user = User(nickname=nickname, email=email, password=password_hash)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
