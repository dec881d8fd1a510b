# mypy: ignore-errors
"""Tests for commenting and reply notifications."""

from datetime import timedelta

from fastapi import status

from wrench_forum.models import Notification


def _comment(client, headers, post_id, body, parent_id=None):
    return client.post(
        f"/api/v1/posts/{post_id}/comments",
        json={"body": body, "parent_id": parent_id},
        headers=headers,
    )


def _kinds(db_session, user):
    return sorted(
        n.kind for n in db_session.query(Notification).filter(Notification.user_id == user.id)
    )


def test_comment_notifies_post_author(client, db_session, test_post, test_user, other_auth_token) -> None:
    response = _comment(client, other_auth_token, test_post.id, "Check the coil pack")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["score"] == 1
    assert response.json()["user_vote"] == 1
    assert _kinds(db_session, test_user) == ["post_reply"]


def test_reply_notifies_each_user_once(
    client, db_session, test_post, test_user, other_user, make_user, make_comment, headers_for
) -> None:
    """A reply on your own post that also mentions you yields one notification."""
    parent = make_comment(test_post, test_user, body="Any luck?")
    carol = make_user(username="carol")

    response = _comment(
        client,
        headers_for(other_user),
        test_post.id,
        "@alice @carol @ghost it was the plug wire",
        parent_id=parent.id,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert _kinds(db_session, test_user) == ["comment_reply"]
    assert _kinds(db_session, carol) == ["mention"]
    assert _kinds(db_session, other_user) == []


def test_commenting_on_own_post_sends_nothing(client, db_session, test_post, test_user, auth_token) -> None:
    _comment(client, auth_token, test_post.id, "Update: still broken")
    assert _kinds(db_session, test_user) == []


def test_unverified_user_cannot_comment(client, test_post, unverified_user, headers_for) -> None:
    response = _comment(client, headers_for(unverified_user), test_post.id, "me too")
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_reply_parent_must_be_on_same_post(
    client, test_post, make_post, make_comment, other_user, auth_token
) -> None:
    elsewhere = make_comment(make_post(other_user, title="Other"), other_user)
    response = _comment(client, auth_token, test_post.id, "reply", parent_id=elsewhere.id)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_blank_comment_rejected(client, test_post, auth_token) -> None:
    assert _comment(client, auth_token, test_post.id, "   ").status_code == status.HTTP_400_BAD_REQUEST


def test_edit_and_delete_comment(client, test_post, make_comment, test_user, auth_token, other_auth_token) -> None:
    """Only the author can edit; deleted comments drop out of the thread."""
    comment = make_comment(test_post, test_user)
    url = f"/api/v1/comments/{comment.id}"

    assert client.put(url, json={"body": "nope"}, headers=other_auth_token).status_code == (
        status.HTTP_403_FORBIDDEN
    )
    edited = client.put(url, json={"body": "Check the IAC valve and MAF"}, headers=auth_token)
    assert edited.status_code == status.HTTP_200_OK
    assert edited.json()["edited_at"] is not None

    assert client.delete(url, headers=auth_token).status_code == status.HTTP_204_NO_CONTENT
    thread = client.get(f"/api/v1/posts/{test_post.id}/comments").json()
    assert thread == []


def test_comment_sorting(client, db_session, test_post, make_comment, test_user) -> None:
    low = make_comment(test_post, test_user, body="low")
    high = make_comment(test_post, test_user, body="high")
    high.score = 9
    db_session.commit()

    best = client.get(f"/api/v1/posts/{test_post.id}/comments", params={"sort": "best"}).json()
    assert [c["id"] for c in best] == [high.id, low.id]
    old = client.get(f"/api/v1/posts/{test_post.id}/comments", params={"sort": "old"}).json()
    assert [c["id"] for c in old] == [low.id, high.id]


def _thread_ids(client, post_id, sort):
    response = client.get(f"/api/v1/posts/{post_id}/comments", params={"sort": sort})
    return [c["id"] for c in response.json()]


def test_new_and_controversial_sorting(client, db_session, test_post, make_comment, test_user) -> None:
    """``new`` is newest first; ``controversial`` puts scores nearest zero first."""
    upvoted = make_comment(test_post, test_user, body="upvoted")
    buried = make_comment(test_post, test_user, body="buried")
    even = make_comment(test_post, test_user, body="even")
    upvoted.score = 4
    buried.score = -3
    even.score = 0
    base = upvoted.created_at
    buried.created_at = base + timedelta(minutes=1)
    even.created_at = base + timedelta(minutes=2)
    db_session.commit()

    assert _thread_ids(client, test_post.id, "new") == [even.id, buried.id, upvoted.id]
    assert _thread_ids(client, test_post.id, "controversial") == [even.id, buried.id, upvoted.id]
    assert _thread_ids(client, test_post.id, "best") == [upvoted.id, even.id, buried.id]


def test_replies_follow_requested_sort(
    client, db_session, test_post, make_comment, test_user, other_user
) -> None:
    """Nested replies are ordered by the same sort as top-level comments."""
    parent = make_comment(test_post, test_user, body="parent")
    first = make_comment(test_post, other_user, body="first reply", parent=parent)
    second = make_comment(test_post, other_user, body="second reply", parent=parent)
    first.score = -5
    second.score = 2
    second.created_at = first.created_at + timedelta(minutes=1)
    db_session.commit()

    def reply_ids(sort):
        thread = client.get(f"/api/v1/posts/{test_post.id}/comments", params={"sort": sort}).json()
        assert [c["id"] for c in thread] == [parent.id]
        return [r["id"] for r in thread[0]["replies"]]

    assert reply_ids("best") == [second.id, first.id]
    assert reply_ids("old") == [first.id, second.id]
    assert reply_ids("new") == [second.id, first.id]
    assert reply_ids("controversial") == [second.id, first.id]
