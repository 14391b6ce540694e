# src/quadboard/api/v1/endpoints/notifications.py
"""Notification endpoints for the Quadboard API."""

from fastapi import APIRouter, Query

from quadboard.api.v1.dependencies import CurrentUserDep, SessionDep, http_error
from quadboard.models import Notification
from quadboard.schemas.notification import NotificationResponse
from quadboard.services import notifications as notification_service
from quadboard.services.errors import QuadboardError

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationResponse])
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    unread_only: bool = Query(False, description="Only return unread notifications"),
    limit: int = Query(100, ge=1, le=500),
) -> list[Notification]:
    """List the caller's notifications, newest first."""
    return list(
        notification_service.list_notifications(
            db, current_user.id, unread_only=unread_only, limit=limit
        )
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Notification:
    """Mark one of the caller's notifications as read."""
    try:
        return notification_service.mark_read(db, notification_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
