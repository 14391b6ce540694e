# src/quadboard/services/groups.py
"""Group membership, the private-group join-request workflow and group chat."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import case, desc, select
from sqlalchemy.orm import Session

from quadboard.models import (
    Group,
    GroupMember,
    GroupMessage,
    JoinRequest,
    JoinRequestStatus,
    NotificationType,
)
from quadboard.services.errors import (
    AdminCannotLeaveError,
    GroupAccessDeniedError,
    GroupIsPrivateError,
    GroupNotFoundError,
    GroupNotPrivateError,
    NotGroupAdminError,
    NotGroupMemberError,
)
from quadboard.services.notifications import MESSAGES, add_notification

logger = logging.getLogger(__name__)


def has_access(group: Group, user_id: str) -> bool:
    """Return True if the user may read and post in the group."""
    if not group.is_private:
        return True
    if user_id in group.member_ids:
        return True
    return any(
        request.user_id == user_id and request.status == JoinRequestStatus.ACCEPTED
        for request in group.join_requests
    )


def get_group(db: Session, group_id: int, *, lock: bool = False) -> Group:
    """Return a group or raise `GroupNotFoundError`."""
    stmt = select(Group).where(Group.id == group_id)
    if lock:
        stmt = stmt.with_for_update()
    group = db.execute(stmt).scalar_one_or_none()
    if group is None:
        raise GroupNotFoundError(f"Group {group_id} not found")
    return group


def _require_admin(group: Group, user_id: str) -> None:
    if group.admin_id != user_id:
        raise NotGroupAdminError(f"Only the admin of group {group.id} may do this")


def _add_member(db: Session, group: Group, user_id: str) -> bool:
    if db.get(GroupMember, (group.id, user_id)) is not None:
        return False
    group.members.append(GroupMember(group_id=group.id, user_id=user_id))
    return True


def create_group(db: Session, name: str, is_private: bool, admin_id: str) -> Group:
    """Create a group with its admin as the first member."""
    group = Group(name=name, is_private=is_private, admin_id=admin_id)
    group.members.append(GroupMember(user_id=admin_id))
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("Group %s created by %s (private=%s)", group.id, admin_id, is_private)
    return group


def list_groups(db: Session) -> Sequence[Group]:
    """Return all groups, newest first."""
    return db.query(Group).order_by(desc(Group.created_at), desc(Group.id)).all()


def request_to_join(db: Session, group_id: int, user_id: str) -> bool:
    """Record a join request on a private group and notify its admin.

    Returns False without writing anything when the user already has a
    request on file or is already a member.

    Raises:
        GroupNotPrivateError: If the group is public.
    """
    group = get_group(db, group_id, lock=True)
    if not group.is_private:
        raise GroupNotPrivateError(f"Group {group_id} is public; join it directly")

    if db.get(JoinRequest, (group_id, user_id)) is not None or user_id in group.member_ids:
        logger.info("Join request by %s on group %s already on file", user_id, group_id)
        return False

    group.join_requests.append(
        JoinRequest(group_id=group_id, user_id=user_id, status=JoinRequestStatus.REQUESTED)
    )
    add_notification(
        db,
        group.admin_id,
        NotificationType.JOIN_REQUEST,
        f"User {user_id} has requested to join your group.",
        group_id=group_id,
        requester_id=user_id,
    )
    db.commit()
    logger.info("Join request by %s on group %s recorded", user_id, group_id)
    return True


def list_join_requests(db: Session, group_id: int, acting_user_id: str) -> Sequence[JoinRequest]:
    """Return the group's join requests, pending ones first (admin only)."""
    group = get_group(db, group_id)
    _require_admin(group, acting_user_id)
    pending_first = case((JoinRequest.status == JoinRequestStatus.REQUESTED, 0), else_=1)
    return (
        db.query(JoinRequest)
        .filter(JoinRequest.group_id == group_id)
        .order_by(pending_first, JoinRequest.created_at)
        .all()
    )


def _set_request_status(
    db: Session,
    group_id: int,
    user_id: str,
    status: JoinRequestStatus,
) -> None:
    request = db.get(JoinRequest, (group_id, user_id))
    if request is not None:
        request.status = status


def accept_join_request(
    db: Session,
    group_id: int,
    requester_id: str,
    acting_user_id: str,
) -> Group:
    """Admit the requester and notify them. Membership has set semantics."""
    group = get_group(db, group_id, lock=True)
    _require_admin(group, acting_user_id)

    _add_member(db, group, requester_id)
    _set_request_status(db, group_id, requester_id, JoinRequestStatus.ACCEPTED)
    add_notification(
        db,
        requester_id,
        NotificationType.REQUEST_GRANTED,
        MESSAGES[NotificationType.REQUEST_GRANTED],
        group_id=group_id,
    )
    db.commit()
    logger.info("Join request by %s on group %s accepted", requester_id, group_id)
    return group


def deny_join_request(
    db: Session,
    group_id: int,
    requester_id: str,
    acting_user_id: str,
) -> None:
    """Turn down a join request and notify the requester."""
    group = get_group(db, group_id, lock=True)
    _require_admin(group, acting_user_id)

    _set_request_status(db, group_id, requester_id, JoinRequestStatus.DENIED)
    add_notification(
        db,
        requester_id,
        NotificationType.REQUEST_DENIED,
        MESSAGES[NotificationType.REQUEST_DENIED],
        group_id=group_id,
    )
    db.commit()
    logger.info("Join request by %s on group %s denied", requester_id, group_id)


def join_public(db: Session, group_id: int, user_id: str) -> bool:
    """Join a public group directly. Returns False if already a member."""
    group = get_group(db, group_id, lock=True)
    if group.is_private:
        raise GroupIsPrivateError(f"Group {group_id} is private; request to join instead")

    added = _add_member(db, group, user_id)
    if added:
        db.commit()
        logger.info("User %s joined group %s", user_id, group_id)
    return added


def leave_group(db: Session, group_id: int, user_id: str) -> None:
    """Remove a non-admin member from the group."""
    group = get_group(db, group_id, lock=True)
    if group.admin_id == user_id:
        raise AdminCannotLeaveError("The admin cannot leave; delete the group instead")

    membership = db.get(GroupMember, (group_id, user_id))
    if membership is None:
        raise NotGroupMemberError(f"User {user_id} is not a member of group {group_id}")

    group.members.remove(membership)
    db.commit()
    logger.info("User %s left group %s", user_id, group_id)


def delete_group(db: Session, group_id: int, requester_id: str) -> None:
    """Delete a group with its members, requests and messages (admin only)."""
    group = get_group(db, group_id, lock=True)
    _require_admin(group, requester_id)
    db.delete(group)
    db.commit()
    logger.info("Group %s deleted by %s", group_id, requester_id)


def post_message(db: Session, group_id: int, sender_id: str, text: str) -> GroupMessage:
    """Append a chat message to a group the sender can access."""
    group = get_group(db, group_id)
    if not has_access(group, sender_id):
        raise GroupAccessDeniedError(f"User {sender_id} cannot post in group {group_id}")

    message = GroupMessage(group_id=group_id, sender_id=sender_id, text=text)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def list_messages(db: Session, group_id: int, user_id: str) -> Sequence[GroupMessage]:
    """Return a group's chat, oldest first, for a user with access."""
    group = get_group(db, group_id)
    if not has_access(group, user_id):
        raise GroupAccessDeniedError(f"User {user_id} cannot read group {group_id}")
    return (
        db.query(GroupMessage)
        .filter(GroupMessage.group_id == group_id)
        .order_by(GroupMessage.created_at, GroupMessage.id)
        .all()
    )
