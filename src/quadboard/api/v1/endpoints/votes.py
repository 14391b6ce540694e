# src/quadboard/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Quadboard API."""

from fastapi import APIRouter, status

from quadboard.api.v1.dependencies import (
    ActiveUserDep,
    CurrentUserDep,
    SessionDep,
    http_error,
)
from quadboard.schemas.vote import VoteCreate, VoteTallyResponse
from quadboard.services import posts as post_service
from quadboard.services import votes as vote_service
from quadboard.services.errors import QuadboardError

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteTallyResponse, status_code=status.HTTP_200_OK)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> vote_service.VoteTally:
    """Cast, switch or retract the caller's vote on a post."""
    try:
        return vote_service.cast_vote(
            db, vote_data.post_id, current_user.id, vote_data.vote_type
        )
    except QuadboardError as err:
        raise http_error(err) from err


@router.get("/{post_id}/my-vote")
async def get_my_vote(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, str | None]:
    """Get current user's vote on a specific post."""
    try:
        post_service.get_post(db, post_id)
    except QuadboardError as err:
        raise http_error(err) from err
    vote = vote_service.get_user_vote(db, post_id, current_user.id)
    return {"vote_type": vote.value if vote else None}
