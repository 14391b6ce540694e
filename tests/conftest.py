# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from quadboard.api.v1.dependencies import get_oracle_dep
from quadboard.core.security import create_identity_token
from quadboard.db.session import Base, enable_sqlite_foreign_keys
from quadboard.db.session import get_db as app_get_session
from quadboard.main import app as fastapi_app
from quadboard.models import Group, GroupMember, Post, SuspensionKind, User

TEST_DB_URL = "sqlite://"


class StubOracle:
    """Moderation oracle returning a fixed verdict and recording what it saw."""

    def __init__(self, harmful: bool = False) -> None:
        self.harmful = harmful
        self.seen: list[str] = []

    async def is_harmful(self, text: str) -> bool:
        self.seen.append(text)
        return self.harmful


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

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
def oracle() -> StubOracle:
    """Oracle that judges everything harmless unless a test flips it."""
    return StubOracle(harmful=False)


@pytest.fixture()
def override_oracle(app: FastAPI, oracle: StubOracle) -> Iterator[StubOracle]:
    """Route the moderation endpoint to the stub oracle."""
    app.dependency_overrides[get_oracle_dep] = lambda: oracle
    try:
        yield oracle
    finally:
        app.dependency_overrides.pop(get_oracle_dep, None)


def _make_user(db_session: Session, user_id: str, name: str) -> User:
    user = User(
        id=user_id,
        email=f"{user_id}@campus.example",
        name=name,
        warnings=0,
        suspension=SuspensionKind.NONE,
    )
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[User]:
    """Create and return a persisted test user."""
    yield _make_user(db_session, "user-alice", "Alice")


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[User]:
    """Create and return a second persisted user."""
    yield _make_user(db_session, "user-bob", "Bob")


@pytest.fixture()
def third_user(db_session: Session) -> Iterator[User]:
    """Create and return a third persisted user."""
    yield _make_user(db_session, "user-carol", "Carol")


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build bearer headers for an arbitrary user id."""

    def _headers(user_id: str, *, email_verified: bool = True) -> dict[str, str]:
        token = create_identity_token(user_id, email_verified=email_verified)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def auth_token(test_user: User, auth_headers: Callable[..., dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user.id)


@pytest.fixture()
def other_auth_token(
    other_user: User,
    auth_headers: Callable[..., dict[str, str]],
) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user.id)


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Iterator[Post]:
    """Create a baseline post authored by the primary test user."""
    post = Post(text="Test post content", author_id=test_user.id)
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    yield post


def _make_group(db_session: Session, admin: User, *, is_private: bool, name: str) -> Group:
    group = Group(name=name, is_private=is_private, admin_id=admin.id)
    group.members.append(GroupMember(user_id=admin.id))
    db_session.add(group)
    db_session.flush()
    db_session.refresh(group)
    return group


@pytest.fixture()
def private_group(db_session: Session, test_user: User) -> Iterator[Group]:
    """Private group administered by the primary test user."""
    yield _make_group(db_session, test_user, is_private=True, name="Study Hall")


@pytest.fixture()
def public_group(db_session: Session, test_user: User) -> Iterator[Group]:
    """Public group administered by the primary test user."""
    yield _make_group(db_session, test_user, is_private=False, name="Campus Life")
