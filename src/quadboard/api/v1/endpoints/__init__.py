# src/quadboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .groups import router as groups_router
from .moderation import router as moderation_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "posts_router",
    "votes_router",
    "groups_router",
    "moderation_router",
    "notifications_router",
    "users_router",
]
