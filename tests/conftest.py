# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from itertools import count
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("HASH_ROUNDS", "4")
os.environ["PROTOCOL"] = "http"
os.environ["HOST"] = "localhost:3000"
os.environ.setdefault("PUBLIC_FOLDER", tempfile.mkdtemp(prefix="inkpost-public-"))

from inkpost.api.v1.dependencies import get_file_stager as app_get_file_stager  # noqa: E402
from inkpost.core.security import create_token, hash_password  # noqa: E402
from inkpost.db.session import Base  # noqa: E402
from inkpost.db.session import get_db as app_get_session  # noqa: E402
from inkpost.main import app as fastapi_app  # noqa: E402
from inkpost.models import Post, User  # noqa: E402
from inkpost.services.files import FileStager  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "s3cret-password"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Repositories commit, so wipe every table to keep tests independent.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def file_stager(tmp_path: Path) -> FileStager:
    """Return a stager confined to the test's temporary directory."""
    return FileStager(temp_dir=tmp_path / "temp", target_dir=tmp_path / "posts")


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    file_stager: FileStager,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[app_get_file_stager] = lambda: file_stager
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(app_get_file_stager, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db_session: Session, nickname: str) -> User:
    user = User(
        nickname=nickname,
        email=f"{nickname}@example.com",
        password=hash_password(TEST_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, f"writer{next(_USER_COUNTER)}")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, f"reader{next(_USER_COUNTER)}")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_token(test_user.email, "access", user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def refresh_token(test_user: User) -> dict[str, str]:
    """Return refresh-token authorization headers for the primary test user."""
    token = create_token(test_user.email, "refresh", user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_posts(db_session: Session, test_user: User) -> Callable[[int], list[Post]]:
    """Return a factory that inserts ``n`` posts in creation order."""

    def _make(n: int) -> list[Post]:
        posts = []
        for i in range(n):
            post = Post(
                author_id=test_user.id,
                title=f"Post {i + 1}",
                content=f"Body {i + 1}",
                like_count=0,
                comment_count=0,
            )
            db_session.add(post)
            # One commit per post keeps ids and created_at in step.
            db_session.commit()
            posts.append(post)
        return posts

    return _make


@pytest.fixture()
def test_post(make_posts: Callable[[int], list[Post]]) -> Post:
    """Create a baseline post for tests."""
    return make_posts(1)[0]
