# src/quadboard/schemas/post.py
"""Post, comment and reply Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    text: str = Field(..., min_length=1, max_length=5000)
    subject_tag: str | None = Field(None, max_length=64, description="Subject tag, defaults to General")


class PostUpdate(BaseModel):
    """Schema for editing a post's text."""

    text: str = Field(..., min_length=1, max_length=5000)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    text: str
    author_id: str
    subject_tag: str
    is_pinned: bool
    upvotes: int
    downvotes: int
    comments_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Schema for commenting on a post or replying to a comment."""

    text: str = Field(..., min_length=1, max_length=2000)


class ReplyResponse(BaseModel):
    """Schema for a reply returned by the API."""

    id: int
    text: str
    author_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """Schema for a comment and its replies."""

    id: int
    post_id: int
    text: str
    author_id: str
    created_at: datetime
    replies: list[ReplyResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
