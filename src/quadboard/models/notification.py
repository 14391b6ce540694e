# src/quadboard/models/notification.py
"""SQLAlchemy model for user notifications."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quadboard.db.session import Base
from quadboard.db.time import utcnow

from .enums import NotificationType, string_enum


class Notification(Base):
    """Notification delivered to a single recipient.

    Only `read` changes after creation.
    """

    __tablename__ = "notification"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    type: Mapped[NotificationType] = mapped_column(
        string_enum(NotificationType),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # Present on join-request notifications so the client can accept/deny inline.
    group_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    requester_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
