# src/quadboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .group import (
    GroupCreate,
    GroupMessageCreate,
    GroupMessageResponse,
    GroupResponse,
    JoinRequestResponse,
)
from .moderation import ReportCreate, ReportResponse
from .notification import NotificationResponse
from .post import (
    CommentCreate,
    CommentResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    ReplyResponse,
)
from .user import UserStatusResponse
from .vote import VoteCreate, VoteTallyResponse

__all__ = [
    "GroupCreate", "GroupMessageCreate", "GroupMessageResponse", "GroupResponse",
    "JoinRequestResponse",
    "ReportCreate", "ReportResponse",
    "NotificationResponse",
    "CommentCreate", "CommentResponse", "PostCreate", "PostResponse", "PostUpdate",
    "ReplyResponse",
    "UserStatusResponse",
    "VoteCreate", "VoteTallyResponse",
]
