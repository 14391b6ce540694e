# src/quadboard/models/post.py
"""SQLAlchemy models for posts, their voter registry, comments and replies."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quadboard.db.session import Base
from quadboard.db.time import utcnow

from .enums import VoteType, string_enum

DEFAULT_SUBJECT_TAG = "General"


class Post(Base):
    """Anonymous post on the public board.

    `upvotes` and `downvotes` are denormalised counts of the matching
    `PostVoter` rows and are only ever changed together with them.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    subject_tag: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_SUBJECT_TAG)
    is_pinned: Mapped[bool] = mapped_column(nullable=False, default=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    voters: Mapped[list[PostVoter]] = relationship(
        "PostVoter",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )


class PostVoter(Base):
    """Voter registry entry; the composite key allows one vote per user."""

    __tablename__ = "post_voter"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    vote_type: Mapped[VoteType] = mapped_column(string_enum(VoteType), nullable=False)

    post: Mapped[Post] = relationship("Post", back_populates="voters")


class Comment(Base):
    """Comment on a post; lives and dies with its parent."""

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_post_created", "post_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    replies: Mapped[list[Reply]] = relationship(
        "Reply",
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="Reply.created_at",
    )


class Reply(Base):
    """Append-only reply to a comment."""

    __tablename__ = "reply"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    comment: Mapped[Comment] = relationship("Comment", back_populates="replies")
