# mypy: ignore-errors
"""Tests for verification review and the admin console."""

from fastapi import status

from wrench_forum.models import UserRole


def test_verification_approval_flow(client, db_session, unverified_user, admin_user, headers_for) -> None:
    """An approved request lets the member post and notifies them."""
    member = headers_for(unverified_user)
    submitted = client.post(
        "/api/v1/verification/", json={"proof_text": "ASE certified, 12 years"}, headers=member
    )
    assert submitted.status_code == status.HTTP_201_CREATED
    request_id = submitted.json()["id"]

    duplicate = client.post("/api/v1/verification/", json={"proof_text": "again"}, headers=member)
    assert duplicate.status_code == status.HTTP_409_CONFLICT

    admin = headers_for(admin_user)
    pending = client.get("/api/v1/admin/verifications", headers=admin).json()
    assert [r["id"] for r in pending] == [request_id]

    approved = client.post(
        f"/api/v1/admin/verifications/{request_id}/approve", json={"note": "Welcome"}, headers=admin
    )
    assert approved.json()["status"] == "approved"

    db_session.refresh(unverified_user)
    assert unverified_user.role == UserRole.VERIFIED_MECHANIC.value
    notes = client.get("/api/v1/notifications/", headers=member).json()
    assert [n["kind"] for n in notes["items"]] == ["verification_approved"]
    assert client.get("/api/v1/verification/me", headers=member).json()["status"] == "approved"

    again = client.post(f"/api/v1/admin/verifications/{request_id}/deny", json={}, headers=admin)
    assert again.status_code == status.HTTP_404_NOT_FOUND


def test_verification_denied(client, db_session, unverified_user, admin_user, headers_for) -> None:
    member = headers_for(unverified_user)
    request_id = client.post(
        "/api/v1/verification/", json={"proof_text": "I fix my own car"}, headers=member
    ).json()["id"]
    denied = client.post(
        f"/api/v1/admin/verifications/{request_id}/deny",
        json={"note": "Need shop references"},
        headers=headers_for(admin_user),
    )
    assert denied.json()["status"] == "denied"
    db_session.refresh(unverified_user)
    assert unverified_user.role == UserRole.UNVERIFIED.value


def test_verified_users_cannot_request_again(client, auth_token) -> None:
    response = client.post("/api/v1/verification/", json={"proof_text": "x"}, headers=auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_admin_only(client, moderator_user, headers_for) -> None:
    assert client.get("/api/v1/admin/", headers=headers_for(moderator_user)).status_code == (
        status.HTTP_403_FORBIDDEN
    )


def test_change_role_and_flair(client, other_user, admin_user, headers_for) -> None:
    admin = headers_for(admin_user)
    promoted = client.put(
        f"/api/v1/admin/users/{other_user.id}/role", json={"role": "moderator"}, headers=admin
    )
    assert promoted.json()["role"] == "moderator"
    assert promoted.json()["can_moderate"] is True

    flair = client.put(
        f"/api/v1/admin/users/{other_user.id}/flair", json={"flair": "Diesel Guru"}, headers=admin
    )
    assert flair.json()["flair"] == "Diesel Guru"

    own = client.put(
        f"/api/v1/admin/users/{admin_user.id}/role", json={"role": "unverified"}, headers=admin
    )
    assert own.status_code == status.HTTP_400_BAD_REQUEST


def test_announcements_lifecycle(client, admin_user, headers_for) -> None:
    """Active announcements are public until deactivated."""
    admin = headers_for(admin_user)
    created = client.post(
        "/api/v1/admin/announcements",
        json={"title": "Maintenance", "content": "Down Sunday night", "expires_days": 3},
        headers=admin,
    )
    assert created.status_code == status.HTTP_201_CREATED
    announcement_id = created.json()["id"]
    assert [a["id"] for a in client.get("/api/v1/announcements").json()] == [announcement_id]

    client.post(f"/api/v1/admin/announcements/{announcement_id}/deactivate", headers=admin)
    assert client.get("/api/v1/announcements").json() == []


def test_admin_panel(client, test_post, admin_user, headers_for) -> None:
    panel = client.get("/api/v1/admin/", headers=headers_for(admin_user)).json()
    assert panel["stats"]["total_posts"] == 1
    assert panel["stats"]["total_users"] == 2
    assert {u["username"] for u in panel["users"]} == {"alice", "root"}
