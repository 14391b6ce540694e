"""Notification helpers shared by the rule engines."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import desc
from sqlalchemy.orm import Session

from quadboard.models import Notification, NotificationType
from quadboard.services.errors import NotificationNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "add_notification",
    "list_notifications",
    "mark_read",
]

MESSAGES = {
    NotificationType.COMMENT: "Someone commented on your post.",
    NotificationType.REQUEST_GRANTED: "Your request to join the group was accepted.",
    NotificationType.REQUEST_DENIED: "Your request to join the group was denied.",
    NotificationType.WARNING: "You have received a warning for harmful content.",
    NotificationType.BAN: "You have been banned for {days} days.",
    NotificationType.SUSPENSION: "Your account has been permanently suspended.",
}


def add_notification(
    db: Session,
    user_id: str,
    notification_type: NotificationType,
    message: str,
    *,
    group_id: int | None = None,
    requester_id: str | None = None,
) -> Notification:
    """Stage an unread notification for `user_id`.

    The caller owns the transaction so the notification commits together
    with the state change that caused it.
    """
    notification = Notification(
        user_id=user_id,
        type=notification_type,
        message=message,
        group_id=group_id,
        requester_id=requester_id,
        read=False,
    )
    db.add(notification)
    logger.info("Notification %s queued for user %s", notification_type.value, user_id)
    return notification


def list_notifications(
    db: Session,
    user_id: str,
    *,
    unread_only: bool = False,
    limit: int = 100,
) -> Sequence[Notification]:
    """Return a user's notifications, newest first."""
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read.is_(False))
    return (
        query.order_by(desc(Notification.created_at), desc(Notification.id))
        .limit(limit)
        .all()
    )


def mark_read(db: Session, notification_id: int, user_id: str) -> Notification:
    """Mark one of the user's notifications as read."""
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id,
    ).first()
    if notification is None:
        raise NotificationNotFoundError(f"Notification {notification_id} not found")
    if not notification.read:
        notification.read = True
        db.commit()
    return notification
