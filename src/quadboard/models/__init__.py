# src/quadboard/models/__init__.py
"""SQLAlchemy models for the Quadboard application."""

from .enums import (
    ContentType,
    JoinRequestStatus,
    NotificationType,
    SuspensionKind,
    VoteType,
)
from .group import Group, GroupMember, GroupMessage, JoinRequest
from .notification import Notification
from .post import Comment, Post, PostVoter, Reply
from .user import HiddenPost, User

__all__ = [
    "ContentType", "JoinRequestStatus", "NotificationType", "SuspensionKind", "VoteType",
    "Group", "GroupMember", "GroupMessage", "JoinRequest",
    "Notification",
    "Comment", "Post", "PostVoter", "Reply",
    "HiddenPost", "User",
]
