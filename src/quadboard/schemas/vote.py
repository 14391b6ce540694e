# src/quadboard/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict

from quadboard.models import VoteType


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    post_id: int
    vote_type: VoteType


class VoteTallyResponse(BaseModel):
    """Counters after a vote and the caller's resulting vote."""

    post_id: int
    upvotes: int
    downvotes: int
    user_vote: VoteType | None

    model_config = ConfigDict(from_attributes=True)
