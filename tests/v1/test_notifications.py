# mypy: ignore-errors
"""Tests for notification endpoints."""

from fastapi import status

from wrench_forum.models import NotificationKind
from wrench_forum.services.notifications import notify


def _seed(db_session, user, count=2):
    items = [
        notify(db_session, recipient_id=user.id, kind=NotificationKind.ANNOUNCEMENT, content=f"n{i}")
        for i in range(count)
    ]
    db_session.commit()
    return items


def test_list_and_unread_count(client, db_session, test_user, auth_token) -> None:
    _seed(db_session, test_user)
    body = client.get("/api/v1/notifications/", headers=auth_token).json()
    assert body["unread_count"] == 2
    assert [n["content"] for n in body["items"]] == ["n1", "n0"]


def test_mark_read_is_scoped_to_owner(client, db_session, test_user, auth_token, other_auth_token) -> None:
    """Another user's notification looks like it does not exist."""
    first, _ = _seed(db_session, test_user)

    stranger = client.post(f"/api/v1/notifications/{first.id}/read", headers=other_auth_token)
    assert stranger.status_code == status.HTTP_404_NOT_FOUND

    owner = client.post(f"/api/v1/notifications/{first.id}/read", headers=auth_token)
    assert owner.json() == {"unread_count": 1}


def test_mark_all_read(client, db_session, test_user, auth_token) -> None:
    _seed(db_session, test_user, count=3)
    assert client.post("/api/v1/notifications/read-all", headers=auth_token).json() == {"unread_count": 0}
    assert client.get("/api/v1/notifications/unread-count", headers=auth_token).json() == {
        "unread_count": 0
    }
