# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from ideahub_stage.core.security import create_access_token
from ideahub_stage.db.session import Base
from ideahub_stage.db.session import get_db as app_get_session
from ideahub_stage.main import app as fastapi_app
from ideahub_stage.models import Comment, Idea, User

TEST_DB_URL = "sqlite://"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

_CLOCK = count(1)


def next_timestamp() -> datetime:
    """Strictly increasing timestamps so orderings are deterministic."""
    return BASE_TIME + timedelta(seconds=next(_CLOCK))


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

        # Services commit for real; wipe rows so every test starts empty.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(username: str, **fields: Any) -> User:
        user = User(
            id=fields.pop("id", f"user-{username}"),
            email=fields.pop("email", f"{username}@example.com"),
            username=username,
            created_at=fields.pop("created_at", next_timestamp()),
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user("alice", name="Alice", bio="Builds things")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bob", name="Bob")


def bearer(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    return bearer


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    return bearer(other_user)


@pytest.fixture()
def make_idea(db_session: Session) -> Callable[..., Idea]:
    def _make_idea(author: User, title: str = "A useful idea", **fields: Any) -> Idea:
        created_at = fields.pop("created_at", next_timestamp())
        idea = Idea(
            title=title,
            description=fields.pop("description", {"type": "doc", "content": []}),
            uploaded_images=fields.pop("uploaded_images", []),
            author_user_id=author.id,
            votes_count=fields.pop("votes_count", 0),
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(idea)
        db_session.commit()
        return idea

    return _make_idea


@pytest.fixture()
def test_idea(make_idea: Callable[..., Idea], test_user: User) -> Idea:
    return make_idea(test_user)


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make_comment(
        idea: Idea,
        author: User,
        content: str = "A comment",
        *,
        parent: Comment | None = None,
        **fields: Any,
    ) -> Comment:
        created_at = fields.pop("created_at", next_timestamp())
        comment = Comment(
            idea_id=idea.id,
            parent_comment_id=parent.id if parent else None,
            author_user_id=author.id,
            content=content,
            votes_count=fields.pop("votes_count", 0),
            is_deleted=fields.pop("is_deleted", False),
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make_comment


@pytest.fixture()
def test_comment(make_comment: Callable[..., Comment], test_idea: Idea, test_user: User) -> Comment:
    return make_comment(test_idea, test_user, "First!")
