# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from wrench_forum.core import security
from wrench_forum.db.session import Base
from wrench_forum.db.session import get_db as app_get_session
from wrench_forum.main import app as fastapi_app
from wrench_forum.models import AuthSession, Category, Post, Store, User, UserProfile, UserRole, Vote
from wrench_forum.models import Comment, VoteTarget
from wrench_forum.services.categories import ensure_default_categories

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
# Hashing once keeps the fixtures fast; bcrypt is deliberately slow.
TEST_PASSWORD = "correct-horse"
_TEST_PASSWORD_HASH = security.hash_password(TEST_PASSWORD)


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
    ensure_default_categories(session)
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
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
def test_password() -> str:
    """Plain-text password shared by every fixture user."""
    return TEST_PASSWORD


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the given role."""

    def _make_user(role: UserRole = UserRole.VERIFIED_MECHANIC, username: str | None = None) -> User:
        n = next(_USER_COUNTER)
        username = username or f"user_{n}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=_TEST_PASSWORD_HASH,
            role=role.value,
        )
        user.profile = UserProfile()
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a verified mechanic."""
    return make_user(UserRole.VERIFIED_MECHANIC, "alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second verified mechanic."""
    return make_user(UserRole.VERIFIED_MECHANIC, "bob")


@pytest.fixture()
def unverified_user(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.UNVERIFIED, "newbie")


@pytest.fixture()
def moderator_user(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.MODERATOR, "mod")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.ADMIN, "root")


@pytest.fixture()
def headers_for(db_session: Session) -> Callable[[User], dict[str, str]]:
    """Return a factory producing bearer headers for a fresh session of a user."""

    def _headers_for(user: User) -> dict[str, str]:
        session = AuthSession(
            token=security.generate_session_token(),
            user_id=user.id,
            expires_at=security.session_expiry(),
        )
        db_session.add(session)
        db_session.commit()
        return {"Authorization": f"Bearer {session.token}"}

    return _headers_for


@pytest.fixture()
def auth_token(test_user: User, headers_for: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return headers_for(test_user)


@pytest.fixture()
def other_auth_token(other_user: User, headers_for: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return headers_for(other_user)


@pytest.fixture()
def engine_category(db_session: Session) -> Category:
    return db_session.query(Category).filter(Category.slug == "engine").one()


@pytest.fixture()
def make_post(db_session: Session, engine_category: Category) -> Callable[..., Post]:
    """Return a factory that inserts posts with the author's implicit upvote."""

    def _make_post(author: User, title: str = "Rough idle when cold", body: str = "Any ideas?") -> Post:
        post = Post(
            user_id=author.id,
            category_id=engine_category.id,
            title=title,
            body=body,
            score=1,
        )
        db_session.add(post)
        db_session.flush()
        db_session.add(
            Vote(user_id=author.id, target_kind=VoteTarget.POST.value, target_id=post.id, value=1)
        )
        author.karma += 1
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post for tests."""
    return make_post(test_user)


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make_comment(post: Post, author: User, body: str = "Check the IAC valve", parent: Comment | None = None) -> Comment:
        comment = Comment(
            post_id=post.id,
            user_id=author.id,
            parent_id=parent.id if parent else None,
            body=body,
            score=1,
        )
        db_session.add(comment)
        db_session.flush()
        db_session.add(
            Vote(
                user_id=author.id,
                target_kind=VoteTarget.COMMENT.value,
                target_id=comment.id,
                value=1,
            )
        )
        author.karma += 1
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment


@pytest.fixture()
def test_store(db_session: Session, test_user: User) -> Store:
    store = Store(
        name="RockAuto",
        url="https://www.rockauto.com",
        description="Huge online parts catalog",
        category="Aftermarket Parts",
        submitted_by=test_user.id,
    )
    db_session.add(store)
    db_session.commit()
    db_session.refresh(store)
    return store
