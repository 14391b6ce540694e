# src/quadboard/schemas/notification.py
"""Notification Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from quadboard.models import NotificationType


class NotificationResponse(BaseModel):
    """Schema for a notification returned by the API."""

    id: int
    type: NotificationType
    message: str
    group_id: int | None = None
    requester_id: str | None = None
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
