# src/quadboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    groups_router,
    moderation_router,
    notifications_router,
    posts_router,
    users_router,
    votes_router,
)

__all__ = [
    "posts_router",
    "votes_router",
    "groups_router",
    "moderation_router",
    "notifications_router",
    "users_router",
]
