"""Helpers for user documents."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quadboard.models import SuspensionKind, User
from quadboard.services.errors import UserNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "ensure_user",
    "get_user",
    "require_user",
]


def get_user(db: Session, user_id: str) -> User | None:
    """Return a single user by id."""
    return db.get(User, user_id)


def require_user(db: Session, user_id: str) -> User:
    """Return a user or raise `UserNotFoundError`."""
    user = get_user(db, user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    return user


def ensure_user(
    db: Session,
    user_id: str,
    *,
    email: str | None = None,
    name: str | None = None,
) -> User:
    """Create the user document on first sight; existing documents are left alone."""
    user = get_user(db, user_id)
    if user is not None:
        return user

    user = User(
        id=user_id,
        email=email,
        name=name or "Anonymous",
        warnings=0,
        suspension=SuspensionKind.NONE,
        suspension_end=None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created it first.
        db.rollback()
        return require_user(db, user_id)
    logger.info("User document created for %s", user_id)
    return user
