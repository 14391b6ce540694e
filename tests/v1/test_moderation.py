# tests/v1/test_moderation.py
"""Tests for the report endpoint."""

from fastapi import status

from quadboard.models import Post, SuspensionKind


def _report(client, headers, post, author_id):
    return client.post(
        "/api/v1/moderation/report",
        json={"content_id": post.id, "content_type": "post", "author_id": author_id},
        headers=headers,
    )


def test_report_harmless_post(client, other_auth_token, test_post, test_user, override_oracle) -> None:
    """Test that a harmless report leaves the post in place."""
    response = _report(client, other_auth_token, test_post, test_user.id)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "content_id": test_post.id,
        "content_type": "post",
        "harmful": False,
        "action": "none",
        "content_deleted": False,
    }
    assert override_oracle.seen == [test_post.text]


def test_report_harmful_post(
    client, auth_token, other_auth_token, test_post, test_user, override_oracle, db_session,
) -> None:
    """Test that harmful content is removed and its author warned."""
    override_oracle.harmful = True

    response = _report(client, other_auth_token, test_post, test_user.id)

    assert response.json()["action"] == "warn"
    assert response.json()["content_deleted"] is True
    assert db_session.get(Post, test_post.id) is None

    me = client.get("/api/v1/users/me", headers=auth_token).json()
    assert me["warnings"] == 1
    assert me["suspension"] == "none"


def test_suspended_author_cannot_post(
    client, auth_token, other_auth_token, test_user, override_oracle, db_session,
) -> None:
    """Test that a permanent suspension blocks new content."""
    override_oracle.harmful = True
    test_user.warnings = 2
    db_session.flush()

    post = client.post("/api/v1/posts/", json={"text": "rant"}, headers=auth_token).json()
    response = client.post(
        "/api/v1/moderation/report",
        json={"content_id": post["id"], "content_type": "post", "author_id": test_user.id},
        headers=other_auth_token,
    )
    assert response.json()["action"] == "permanent_suspend"
    assert test_user.suspension is SuspensionKind.PERMANENT

    blocked = client.post("/api/v1/posts/", json={"text": "again"}, headers=auth_token)
    assert blocked.status_code == status.HTTP_403_FORBIDDEN


def test_report_missing_content(client, other_auth_token, test_user, override_oracle) -> None:
    """Test reporting content that no longer exists."""
    response = client.post(
        "/api/v1/moderation/report",
        json={"content_id": 555, "content_type": "comment", "author_id": test_user.id},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_unverified_user_cannot_report(
    client, auth_headers, test_post, test_user, override_oracle,
) -> None:
    """Test that reporting requires a verified email address."""
    response = _report(client, auth_headers("unverified", email_verified=False), test_post, test_user.id)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert override_oracle.seen == []


def test_report_naming_wrong_author(
    client, auth_token, other_auth_token, test_post, third_user, override_oracle, db_session,
) -> None:
    """Test that a report cannot pin content on someone who did not write it."""
    override_oracle.harmful = True

    response = _report(client, other_auth_token, test_post, third_user.id)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert third_user.warnings == 0
    assert db_session.get(Post, test_post.id) is not None
    me = client.get("/api/v1/users/me", headers=auth_token).json()
    assert me["warnings"] == 0
