# src/quadboard/api/v1/endpoints/groups.py
"""Group-related endpoints for the Quadboard API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from quadboard.api.v1.dependencies import (
    ActiveUserDep,
    CurrentUserDep,
    SessionDep,
    VerifiedUserDep,
    http_error,
)
from quadboard.models import Group, GroupMessage, JoinRequest
from quadboard.schemas.group import (
    GroupCreate,
    GroupMessageCreate,
    GroupMessageResponse,
    GroupResponse,
    JoinRequestResponse,
)
from quadboard.services import groups as group_service
from quadboard.services.errors import QuadboardError

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/", response_model=list[GroupResponse])
async def list_groups(_current_user: CurrentUserDep, db: SessionDep) -> list[Group]:
    """List all groups, newest first."""
    return list(group_service.list_groups(db))


@router.post("/", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Group:
    """Create a group administered by the caller."""
    return group_service.create_group(
        db, group_data.name, group_data.is_private, current_user.id
    )


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: int, _current_user: CurrentUserDep, db: SessionDep) -> Group:
    """Get a specific group by ID."""
    try:
        return group_service.get_group(db, group_id)
    except QuadboardError as err:
        raise http_error(err) from err


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_group(group_id: int, current_user: VerifiedUserDep, db: SessionDep) -> Response:
    """Delete a group (admin only)."""
    try:
        group_service.delete_group(db, group_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{group_id}/join", status_code=status.HTTP_201_CREATED)
async def join_group(group_id: int, current_user: VerifiedUserDep, db: SessionDep) -> dict[str, str]:
    """Join a public group."""
    try:
        added = group_service.join_public(db, group_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
    return {"status": "joined" if added else "already_member"}


@router.post("/{group_id}/request", status_code=status.HTTP_202_ACCEPTED)
async def request_to_join(
    group_id: int,
    current_user: VerifiedUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Ask the admin of a private group to let the caller in."""
    try:
        created = group_service.request_to_join(db, group_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
    return {"status": "requested" if created else "already_requested"}


@router.delete(
    "/{group_id}/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def leave_group(group_id: int, current_user: VerifiedUserDep, db: SessionDep) -> Response:
    """Leave a group."""
    try:
        group_service.leave_group(db, group_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{group_id}/requests", response_model=list[JoinRequestResponse])
async def list_join_requests(
    group_id: int,
    current_user: VerifiedUserDep,
    db: SessionDep,
) -> list[JoinRequest]:
    """List a group's join requests (admin only)."""
    try:
        return list(group_service.list_join_requests(db, group_id, current_user.id))
    except QuadboardError as err:
        raise http_error(err) from err


@router.post("/{group_id}/requests/{user_id}/accept", response_model=GroupResponse)
async def accept_join_request(
    group_id: int,
    user_id: str,
    current_user: VerifiedUserDep,
    db: SessionDep,
) -> Group:
    """Accept a join request (admin only)."""
    try:
        return group_service.accept_join_request(db, group_id, user_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err


@router.post("/{group_id}/requests/{user_id}/deny")
async def deny_join_request(
    group_id: int,
    user_id: str,
    current_user: VerifiedUserDep,
    db: SessionDep,
) -> dict[str, str]:
    """Deny a join request (admin only)."""
    try:
        group_service.deny_join_request(db, group_id, user_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
    return {"status": "denied"}


@router.get("/{group_id}/messages", response_model=list[GroupMessageResponse])
async def list_messages(
    group_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[GroupMessage]:
    """Read a group's chat."""
    try:
        return list(group_service.list_messages(db, group_id, current_user.id))
    except QuadboardError as err:
        raise http_error(err) from err


@router.post(
    "/{group_id}/messages",
    response_model=GroupMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_message(
    group_id: int,
    message_data: GroupMessageCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> GroupMessage:
    """Send a message to a group's chat."""
    try:
        return group_service.post_message(db, group_id, current_user.id, message_data.text)
    except QuadboardError as err:
        raise http_error(err) from err
