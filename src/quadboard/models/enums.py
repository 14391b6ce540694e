# src/quadboard/models/enums.py
"""Closed value sets stored as short strings."""

from __future__ import annotations

import enum

from sqlalchemy import Enum


class VoteType(str, enum.Enum):
    """Direction of a vote on a post."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class JoinRequestStatus(str, enum.Enum):
    """Lifecycle of a private-group join request."""

    REQUESTED = "requested"
    ACCEPTED = "accepted"
    DENIED = "denied"


class SuspensionKind(str, enum.Enum):
    """Account suspension tag; `temporary` is the only kind with an end time."""

    NONE = "none"
    TEMPORARY = "temporary"
    PERMANENT = "permanent"


class NotificationType(str, enum.Enum):
    """Kinds of notifications the rule engines emit."""

    COMMENT = "comment"
    JOIN_REQUEST = "joinRequest"
    REQUEST_GRANTED = "requestGranted"
    REQUEST_DENIED = "requestDenied"
    WARNING = "warning"
    BAN = "ban"
    SUSPENSION = "suspension"


class ContentType(str, enum.Enum):
    """Reportable content."""

    POST = "post"
    COMMENT = "comment"


def string_enum(enum_cls: type[enum.Enum], length: int = 16) -> Enum:
    """Column type storing the enum's value rather than its member name."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=length,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
