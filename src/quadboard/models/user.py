# src/quadboard/models/user.py
"""SQLAlchemy models for user documents."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quadboard.db.session import Base
from quadboard.db.time import as_utc, utcnow

from .enums import SuspensionKind, string_enum


class User(Base):
    """Per-user moderation state keyed by the identity provider's user id."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="Anonymous")

    # Never decreases; frozen once the account is permanently suspended.
    warnings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    suspension: Mapped[SuspensionKind] = mapped_column(
        string_enum(SuspensionKind),
        nullable=False,
        default=SuspensionKind.NONE,
    )
    # Set only while suspension == temporary.
    suspension_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    hidden_posts: Mapped[list[HiddenPost]] = relationship(
        "HiddenPost",
        cascade="all, delete-orphan",
    )

    def is_suspended(self, now: datetime | None = None) -> bool:
        """Return True while the account is barred from creating content."""
        if self.suspension == SuspensionKind.PERMANENT:
            return True
        if self.suspension == SuspensionKind.TEMPORARY and self.suspension_end is not None:
            return as_utc(self.suspension_end) > (now or utcnow())
        return False


class HiddenPost(Base):
    """A post a user chose not to see in their feed."""

    __tablename__ = "hidden_post"

    user_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
