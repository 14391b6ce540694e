"""User status endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from quadboard.api.v1.dependencies import CurrentUserDep
from quadboard.schemas.user import UserStatusResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserStatusResponse)
async def get_my_status(current_user: CurrentUserDep) -> UserStatusResponse:
    """Return the caller's warnings and suspension state."""
    return UserStatusResponse(
        id=current_user.id,
        name=current_user.name,
        warnings=current_user.warnings,
        suspension=current_user.suspension,
        suspension_end=current_user.suspension_end,
        is_suspended=current_user.is_suspended(),
    )
