# tests/test_users.py
"""User documents and suspension status."""

from datetime import UTC, datetime, timedelta

import pytest

from quadboard.models import SuspensionKind, User
from quadboard.services.errors import UserNotFoundError
from quadboard.services.users import ensure_user, require_user


def test_ensure_user_creates_default_document(db_session) -> None:
    user = ensure_user(db_session, "fresh-user", email="fresh@campus.example")

    assert user.name == "Anonymous"
    assert user.warnings == 0
    assert user.suspension is SuspensionKind.NONE
    assert user.suspension_end is None
    assert not user.is_suspended()


def test_ensure_user_leaves_existing_document_alone(db_session, test_user) -> None:
    test_user.warnings = 1
    db_session.flush()

    user = ensure_user(db_session, test_user.id, name="Someone Else")

    assert user.warnings == 1
    assert user.name == "Alice"


def test_require_user_raises_for_unknown_id(db_session) -> None:
    with pytest.raises(UserNotFoundError):
        require_user(db_session, "nobody")


def test_temporary_suspension_expires() -> None:
    now = datetime(2026, 5, 1, tzinfo=UTC)
    user = User(
        id="u",
        suspension=SuspensionKind.TEMPORARY,
        suspension_end=now + timedelta(days=3),
    )

    assert user.is_suspended(now)
    assert not user.is_suspended(now + timedelta(days=3))


def test_naive_suspension_end_is_read_as_utc() -> None:
    now = datetime(2026, 5, 1, tzinfo=UTC)
    user = User(
        id="u",
        suspension=SuspensionKind.TEMPORARY,
        suspension_end=datetime(2026, 5, 2),
    )

    assert user.is_suspended(now)


def test_permanent_suspension_never_expires() -> None:
    user = User(id="u", suspension=SuspensionKind.PERMANENT)
    assert user.is_suspended(datetime(2100, 1, 1, tzinfo=UTC))
