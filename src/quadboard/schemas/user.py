# src/quadboard/schemas/user.py
"""User Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from quadboard.models import SuspensionKind


class UserStatusResponse(BaseModel):
    """The caller's moderation standing."""

    id: str
    name: str
    warnings: int
    suspension: SuspensionKind
    suspension_end: datetime | None
    is_suspended: bool

    model_config = ConfigDict(from_attributes=True)
