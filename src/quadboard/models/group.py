"""SQLAlchemy models for discussion groups, membership and join requests."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quadboard.db.session import Base
from quadboard.db.time import utcnow

from .enums import JoinRequestStatus, string_enum


class Group(Base):
    """Community group; the admin is always one of its members."""

    __tablename__ = "community_group"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin_id: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    members: Mapped[list[GroupMember]] = relationship(
        "GroupMember",
        cascade="all, delete-orphan",
    )
    join_requests: Mapped[list[JoinRequest]] = relationship(
        "JoinRequest",
        cascade="all, delete-orphan",
    )
    messages: Mapped[list[GroupMessage]] = relationship(
        "GroupMessage",
        cascade="all, delete-orphan",
        order_by="GroupMessage.created_at",
    )

    @property
    def member_ids(self) -> set[str]:
        """Return member user ids as a set."""
        return {member.user_id for member in self.members}


class GroupMember(Base):
    """Join table mapping users into groups. Presence implies membership."""

    __tablename__ = "group_member"

    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community_group.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)


class JoinRequest(Base):
    """Request by a non-member to enter a private group."""

    __tablename__ = "join_request"

    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community_group.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    status: Mapped[JoinRequestStatus] = mapped_column(
        string_enum(JoinRequestStatus),
        nullable=False,
        default=JoinRequestStatus.REQUESTED,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class GroupMessage(Base):
    """Chat message posted inside a group."""

    __tablename__ = "group_message"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community_group.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(String(128), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
