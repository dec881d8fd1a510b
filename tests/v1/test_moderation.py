# mypy: ignore-errors
"""Tests for reports, removals and bans."""

from fastapi import status

from wrench_forum.models import ActivityLog, AuthSession


def test_report_and_resolve(client, test_post, other_auth_token, moderator_user, headers_for) -> None:
    """Members report content and moderators work the queue."""
    response = client.post(
        "/api/v1/moderation/reports",
        json={"target_type": "post", "target_id": test_post.id, "reason": "Spam link"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    report_id = response.json()["id"]

    mod_headers = headers_for(moderator_user)
    queue = client.get("/api/v1/moderation/reports", headers=mod_headers).json()
    assert [r["id"] for r in queue] == [report_id]

    resolved = client.post(f"/api/v1/moderation/reports/{report_id}/resolve", headers=mod_headers)
    assert resolved.json()["resolved"] is True
    assert client.get("/api/v1/moderation/reports", headers=mod_headers).json() == []


def test_report_validation(client, other_auth_token) -> None:
    blank = client.post(
        "/api/v1/moderation/reports",
        json={"target_type": "post", "target_id": 1, "reason": "  "},
        headers=other_auth_token,
    )
    assert blank.status_code == status.HTTP_400_BAD_REQUEST
    missing = client.post(
        "/api/v1/moderation/reports",
        json={"target_type": "comment", "target_id": 9999, "reason": "rude"},
        headers=other_auth_token,
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_members_cannot_moderate(client, test_post, auth_token) -> None:
    assert client.get("/api/v1/moderation/reports", headers=auth_token).status_code == (
        status.HTTP_403_FORBIDDEN
    )
    response = client.post(f"/api/v1/moderation/posts/{test_post.id}/remove", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_remove_restore_and_pin(client, db_session, test_post, moderator_user, headers_for) -> None:
    """Moderator actions change the post and land in the activity log."""
    headers = headers_for(moderator_user)
    base = f"/api/v1/moderation/posts/{test_post.id}"

    assert client.post(f"{base}/remove", headers=headers).json()["is_removed"] is True
    assert client.get(f"/api/v1/posts/{test_post.id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.post(f"{base}/restore", headers=headers).json()["is_removed"] is False
    assert client.post(f"{base}/pin", json={"pinned": True}, headers=headers).json()["is_pinned"] is True

    actions = [entry.action for entry in db_session.query(ActivityLog).order_by(ActivityLog.id)]
    assert actions == ["remove_post", "restore_post", "pin_post"]


def test_remove_comment(client, test_post, make_comment, other_user, moderator_user, headers_for) -> None:
    comment = make_comment(test_post, other_user)
    response = client.post(
        f"/api/v1/moderation/comments/{comment.id}/remove", headers=headers_for(moderator_user)
    )
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{test_post.id}/comments").json() == []


def test_ban_ends_sessions(client, db_session, other_user, other_auth_token, moderator_user, headers_for) -> None:
    """Banning signs the user out and blocks their token."""
    response = client.post(
        f"/api/v1/moderation/users/{other_user.id}/ban",
        json={"reason": "Scamming"},
        headers=headers_for(moderator_user),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_banned"] is True
    assert response.json()["ban_reason"] == "Scamming"
    assert db_session.query(AuthSession).filter(AuthSession.user_id == other_user.id).count() == 0
    assert client.get("/api/v1/auth/me", headers=other_auth_token).status_code == (
        status.HTTP_401_UNAUTHORIZED
    )

    unbanned = client.post(
        f"/api/v1/moderation/users/{other_user.id}/unban", headers=headers_for(moderator_user)
    )
    assert unbanned.json()["is_banned"] is False


def test_ban_rules(client, moderator_user, admin_user, headers_for) -> None:
    """Nobody bans themselves and moderators cannot ban admins."""
    mod_headers = headers_for(moderator_user)
    assert client.post(
        f"/api/v1/moderation/users/{moderator_user.id}/ban", json={}, headers=mod_headers
    ).status_code == status.HTTP_400_BAD_REQUEST
    assert client.post(
        f"/api/v1/moderation/users/{admin_user.id}/ban", json={}, headers=mod_headers
    ).status_code == status.HTTP_403_FORBIDDEN
    assert client.post(
        "/api/v1/moderation/users/9999/ban", json={}, headers=mod_headers
    ).status_code == status.HTTP_404_NOT_FOUND


def test_list_banned_users(client, db_session, other_user, unverified_user, moderator_user, headers_for) -> None:
    """Moderators can see who is banned; the list drops users once unbanned."""
    mod_headers = headers_for(moderator_user)
    assert client.get("/api/v1/moderation/users/banned", headers=mod_headers).json() == []

    for user in (unverified_user, other_user):
        client.post(
            f"/api/v1/moderation/users/{user.id}/ban", json={"reason": "spam"}, headers=mod_headers
        )
    banned = client.get("/api/v1/moderation/users/banned", headers=mod_headers).json()
    assert [u["username"] for u in banned] == ["bob", "newbie"]
    assert banned[0]["ban_reason"] == "spam"

    client.post(f"/api/v1/moderation/users/{other_user.id}/unban", headers=mod_headers)
    banned = client.get("/api/v1/moderation/users/banned", headers=mod_headers).json()
    assert [u["username"] for u in banned] == ["newbie"]


def test_banned_list_requires_moderator(client, auth_token) -> None:
    response = client.get("/api/v1/moderation/users/banned", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
