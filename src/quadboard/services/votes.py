# src/quadboard/services/votes.py
"""Vote ledger: aggregate counts plus a one-vote-per-user registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from quadboard.models import Post, PostVoter, VoteType
from quadboard.services.errors import PostNotFoundError

logger = logging.getLogger(__name__)

_COUNTER_FIELD = {
    VoteType.UPVOTE: "upvotes",
    VoteType.DOWNVOTE: "downvotes",
}


@dataclass(frozen=True)
class VoteTally:
    """Post counters after a vote, plus the caller's resulting vote."""

    post_id: int
    upvotes: int
    downvotes: int
    user_vote: VoteType | None


def _bump(post: Post, vote_type: VoteType, delta: int) -> None:
    field = _COUNTER_FIELD[vote_type]
    setattr(post, field, getattr(post, field) + delta)


def _lock_post(db: Session, post_id: int) -> Post:
    post = db.execute(
        select(Post).where(Post.id == post_id).with_for_update()
    ).scalar_one_or_none()
    if post is None:
        raise PostNotFoundError(f"Post {post_id} not found")
    return post


def cast_vote(db: Session, post_id: int, user_id: str, vote_type: VoteType) -> VoteTally:
    """Apply a toggle-or-switch vote and persist voters and counters together.

    - no previous vote: record it and add one to its counter;
    - same direction again: retract it and take one off its counter;
    - opposite direction: flip it, moving each counter by exactly one.

    Raises:
        PostNotFoundError: If the post does not exist. Nothing is written.
    """
    vote_type = VoteType(vote_type)
    post = _lock_post(db, post_id)

    existing = db.get(PostVoter, (post_id, user_id))
    user_vote: VoteType | None

    if existing is None:
        db.add(PostVoter(post_id=post_id, user_id=user_id, vote_type=vote_type))
        _bump(post, vote_type, 1)
        user_vote = vote_type
        action = "added"
    elif existing.vote_type == vote_type:
        db.delete(existing)
        _bump(post, vote_type, -1)
        user_vote = None
        action = "retracted"
    else:
        _bump(post, existing.vote_type, -1)
        _bump(post, vote_type, 1)
        existing.vote_type = vote_type
        user_vote = vote_type
        action = "switched"

    db.commit()
    logger.info("Vote %s on post %s by %s (%s)", action, post_id, user_id, vote_type.value)

    return VoteTally(
        post_id=post_id,
        upvotes=post.upvotes,
        downvotes=post.downvotes,
        user_vote=user_vote,
    )


def get_user_vote(db: Session, post_id: int, user_id: str) -> VoteType | None:
    """Return the user's current vote on a post, if any."""
    voter = db.get(PostVoter, (post_id, user_id))
    return voter.vote_type if voter else None
