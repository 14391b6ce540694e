# src/quadboard/services/__init__.py
"""Business logic services for the Quadboard application."""

from .moderation import decide_escalation, report_content
from .perspective import PerspectiveClient, get_moderation_oracle
from .votes import cast_vote, get_user_vote

__all__ = [
    "PerspectiveClient",
    "cast_vote",
    "decide_escalation",
    "get_moderation_oracle",
    "get_user_vote",
    "report_content",
]
