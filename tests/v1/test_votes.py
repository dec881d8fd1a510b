# mypy: ignore-errors
"""Tests for voting endpoints."""

from fastapi import status

from wrench_forum.core.settings import settings


def _vote(client, headers, post_id, value):
    return client.post(f"/api/v1/votes/posts/{post_id}", json={"value": value}, headers=headers)


def test_vote_toggle_and_flip(client, db_session, test_post, test_user, other_auth_token) -> None:
    """Up, up again, down, down again walks the score 2, 1, 0, 1."""
    assert _vote(client, other_auth_token, test_post.id, 1).json() == {"score": 2, "user_vote": 1}
    assert _vote(client, other_auth_token, test_post.id, 1).json() == {"score": 1, "user_vote": 0}
    assert _vote(client, other_auth_token, test_post.id, -1).json() == {"score": 0, "user_vote": -1}
    assert _vote(client, other_auth_token, test_post.id, -1).json() == {"score": 1, "user_vote": 0}

    db_session.refresh(test_post)
    db_session.refresh(test_user)
    assert test_post.score == 1
    assert test_user.karma == 1


def test_flip_moves_score_by_two(client, test_post, other_auth_token) -> None:
    _vote(client, other_auth_token, test_post.id, 1)
    response = _vote(client, other_auth_token, test_post.id, -1)
    assert response.json() == {"score": 0, "user_vote": -1}


def test_non_positive_values_are_downvotes(client, test_post, other_auth_token) -> None:
    """Zero and large negatives both count as a single downvote."""
    assert _vote(client, other_auth_token, test_post.id, 0).json()["user_vote"] == -1
    assert _vote(client, other_auth_token, test_post.id, -7).json()["user_vote"] == 0
    assert _vote(client, other_auth_token, test_post.id, 42).json() == {"score": 2, "user_vote": 1}


def test_author_can_withdraw_own_upvote(client, db_session, test_post, test_user, auth_token) -> None:
    """Voting up on your own post toggles off the implicit upvote."""
    response = _vote(client, auth_token, test_post.id, 1)
    assert response.json() == {"score": 0, "user_vote": 0}
    db_session.refresh(test_user)
    assert test_user.karma == 0


def test_self_vote_rejected_when_disabled(client, test_post, auth_token, monkeypatch) -> None:
    monkeypatch.setattr(settings, "allow_self_votes", False)
    response = _vote(client, auth_token, test_post.id, -1)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_vote_on_comment(client, db_session, test_post, make_comment, other_user, auth_token) -> None:
    """Comment votes adjust the comment score and the commenter's karma."""
    comment = make_comment(test_post, other_user)
    response = client.post(
        f"/api/v1/votes/comments/{comment.id}", json={"value": -1}, headers=auth_token
    )
    assert response.json() == {"score": 0, "user_vote": -1}
    db_session.refresh(other_user)
    assert other_user.karma == 0


def test_vote_on_missing_or_removed_target(client, db_session, test_post, other_auth_token) -> None:
    assert _vote(client, other_auth_token, 9999, 1).status_code == status.HTTP_404_NOT_FOUND
    test_post.is_removed = True
    db_session.commit()
    assert _vote(client, other_auth_token, test_post.id, 1).status_code == status.HTTP_404_NOT_FOUND


def test_vote_requires_authentication(client, test_post) -> None:
    response = client.post(f"/api/v1/votes/posts/{test_post.id}", json={"value": 1})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_unverified_users_may_vote(client, test_post, unverified_user, headers_for) -> None:
    """Post and comment voting is open to every signed-in member."""
    response = _vote(client, headers_for(unverified_user), test_post.id, 1)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["score"] == 2


def test_my_vote(client, test_post, other_auth_token) -> None:
    url = f"/api/v1/votes/posts/{test_post.id}/my-vote"
    assert client.get(url, headers=other_auth_token).json() == {"user_vote": 0}
    _vote(client, other_auth_token, test_post.id, -1)
    assert client.get(url, headers=other_auth_token).json() == {"user_vote": -1}
