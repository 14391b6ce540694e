# src/quadboard/schemas/moderation.py
"""Moderation-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from quadboard.models import ContentType
from quadboard.services.moderation import EscalationAction


class ReportCreate(BaseModel):
    """Schema for reporting a post or comment."""

    content_id: int
    content_type: ContentType
    author_id: str = Field(..., min_length=1, description="Author of the reported content")


class ReportResponse(BaseModel):
    """Outcome of a report."""

    content_id: int
    content_type: ContentType
    harmful: bool
    action: EscalationAction
    content_deleted: bool

    model_config = ConfigDict(from_attributes=True)
