# tests/test_groups.py
"""Group membership, join-request workflow and group chat."""

import pytest

from quadboard.models import (
    Group,
    GroupMember,
    GroupMessage,
    JoinRequest,
    JoinRequestStatus,
    Notification,
    NotificationType,
)
from quadboard.services import groups as group_service
from quadboard.services.errors import (
    AdminCannotLeaveError,
    GroupAccessDeniedError,
    GroupIsPrivateError,
    GroupNotFoundError,
    GroupNotPrivateError,
    NotGroupAdminError,
    NotGroupMemberError,
)


def _notifications(db_session, user_id: str) -> list[Notification]:
    return (
        db_session.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.id)
        .all()
    )


def test_create_group_makes_admin_a_member(db_session, test_user) -> None:
    group = group_service.create_group(db_session, "Chess Club", True, test_user.id)

    assert group.admin_id == test_user.id
    assert group.member_ids == {test_user.id}
    assert group_service.list_groups(db_session)[0].id == group.id


def test_request_to_join_records_request_and_notifies_admin(
    db_session, private_group, test_user, other_user,
) -> None:
    assert group_service.request_to_join(db_session, private_group.id, other_user.id) is True

    request = db_session.get(JoinRequest, (private_group.id, other_user.id))
    assert request.status is JoinRequestStatus.REQUESTED

    [notification] = _notifications(db_session, test_user.id)
    assert notification.type is NotificationType.JOIN_REQUEST
    assert notification.group_id == private_group.id
    assert notification.requester_id == other_user.id
    assert other_user.id in notification.message


def test_duplicate_join_request_is_a_no_op(db_session, private_group, test_user, other_user) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)

    assert group_service.request_to_join(db_session, private_group.id, other_user.id) is False
    assert db_session.query(JoinRequest).count() == 1
    assert len(_notifications(db_session, test_user.id)) == 1


def test_member_cannot_request_again(db_session, private_group, test_user) -> None:
    assert group_service.request_to_join(db_session, private_group.id, test_user.id) is False
    assert db_session.query(JoinRequest).count() == 0


def test_request_on_public_group_is_rejected(db_session, public_group, other_user) -> None:
    with pytest.raises(GroupNotPrivateError):
        group_service.request_to_join(db_session, public_group.id, other_user.id)


def test_request_on_missing_group_raises(db_session, other_user) -> None:
    with pytest.raises(GroupNotFoundError):
        group_service.request_to_join(db_session, 424_242, other_user.id)


def test_accept_adds_member_and_notifies_requester(
    db_session, private_group, test_user, other_user,
) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)

    group = group_service.accept_join_request(
        db_session, private_group.id, other_user.id, test_user.id
    )

    assert group.member_ids == {test_user.id, other_user.id}
    request = db_session.get(JoinRequest, (private_group.id, other_user.id))
    assert request.status is JoinRequestStatus.ACCEPTED
    assert [n.type for n in _notifications(db_session, other_user.id)] == [
        NotificationType.REQUEST_GRANTED
    ]


def test_accept_twice_keeps_a_single_membership(
    db_session, private_group, test_user, other_user,
) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)
    group_service.accept_join_request(db_session, private_group.id, other_user.id, test_user.id)
    group_service.accept_join_request(db_session, private_group.id, other_user.id, test_user.id)

    members = db_session.query(GroupMember).filter(GroupMember.group_id == private_group.id).all()
    assert sorted(m.user_id for m in members) == sorted([test_user.id, other_user.id])


def test_deny_marks_request_and_keeps_user_out(
    db_session, private_group, test_user, other_user,
) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)
    group_service.deny_join_request(db_session, private_group.id, other_user.id, test_user.id)

    group = db_session.get(Group, private_group.id)
    assert other_user.id not in group.member_ids
    assert not group_service.has_access(group, other_user.id)
    request = db_session.get(JoinRequest, (private_group.id, other_user.id))
    assert request.status is JoinRequestStatus.DENIED
    assert [n.type for n in _notifications(db_session, other_user.id)] == [
        NotificationType.REQUEST_DENIED
    ]


def test_denied_user_cannot_request_again(db_session, private_group, test_user, other_user) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)
    group_service.deny_join_request(db_session, private_group.id, other_user.id, test_user.id)

    assert group_service.request_to_join(db_session, private_group.id, other_user.id) is False


@pytest.mark.parametrize(
    "operation",
    [
        group_service.accept_join_request,
        group_service.deny_join_request,
    ],
)
def test_only_admin_decides_requests(
    db_session, private_group, other_user, third_user, operation,
) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)

    with pytest.raises(NotGroupAdminError):
        operation(db_session, private_group.id, other_user.id, third_user.id)

    request = db_session.get(JoinRequest, (private_group.id, other_user.id))
    assert request.status is JoinRequestStatus.REQUESTED


def test_list_join_requests_puts_pending_first(
    db_session, private_group, test_user, other_user, third_user,
) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)
    group_service.request_to_join(db_session, private_group.id, third_user.id)
    group_service.deny_join_request(db_session, private_group.id, other_user.id, test_user.id)

    requests = group_service.list_join_requests(db_session, private_group.id, test_user.id)

    assert [(r.user_id, r.status) for r in requests] == [
        (third_user.id, JoinRequestStatus.REQUESTED),
        (other_user.id, JoinRequestStatus.DENIED),
    ]
    with pytest.raises(NotGroupAdminError):
        group_service.list_join_requests(db_session, private_group.id, other_user.id)


def test_has_access_rules(db_session, private_group, public_group, other_user) -> None:
    assert group_service.has_access(public_group, other_user.id)
    assert not group_service.has_access(private_group, other_user.id)

    private_group.join_requests.append(
        JoinRequest(user_id=other_user.id, status=JoinRequestStatus.ACCEPTED)
    )
    assert group_service.has_access(private_group, other_user.id)


def test_join_public_group(db_session, public_group, other_user) -> None:
    assert group_service.join_public(db_session, public_group.id, other_user.id) is True
    assert group_service.join_public(db_session, public_group.id, other_user.id) is False
    assert db_session.get(Group, public_group.id).member_ids == {
        public_group.admin_id, other_user.id
    }


def test_join_private_group_directly_is_rejected(db_session, private_group, other_user) -> None:
    with pytest.raises(GroupIsPrivateError):
        group_service.join_public(db_session, private_group.id, other_user.id)


def test_leave_group(db_session, public_group, other_user) -> None:
    group_service.join_public(db_session, public_group.id, other_user.id)
    group_service.leave_group(db_session, public_group.id, other_user.id)

    assert other_user.id not in db_session.get(Group, public_group.id).member_ids
    with pytest.raises(NotGroupMemberError):
        group_service.leave_group(db_session, public_group.id, other_user.id)


def test_admin_cannot_leave(db_session, public_group, test_user) -> None:
    with pytest.raises(AdminCannotLeaveError):
        group_service.leave_group(db_session, public_group.id, test_user.id)


def test_delete_group_is_admin_only_and_cascades(
    db_session, private_group, test_user, other_user,
) -> None:
    group_service.request_to_join(db_session, private_group.id, other_user.id)
    group_service.post_message(db_session, private_group.id, test_user.id, "hello")

    with pytest.raises(NotGroupAdminError):
        group_service.delete_group(db_session, private_group.id, other_user.id)

    group_service.delete_group(db_session, private_group.id, test_user.id)

    assert db_session.get(Group, private_group.id) is None
    assert db_session.query(GroupMember).count() == 0
    assert db_session.query(JoinRequest).count() == 0
    assert db_session.query(GroupMessage).count() == 0


def test_messages_require_access(db_session, private_group, test_user, other_user) -> None:
    group_service.post_message(db_session, private_group.id, test_user.id, "first")
    group_service.post_message(db_session, private_group.id, test_user.id, "second")

    with pytest.raises(GroupAccessDeniedError):
        group_service.post_message(db_session, private_group.id, other_user.id, "let me in")
    with pytest.raises(GroupAccessDeniedError):
        group_service.list_messages(db_session, private_group.id, other_user.id)

    messages = group_service.list_messages(db_session, private_group.id, test_user.id)
    assert [m.text for m in messages] == ["first", "second"]
