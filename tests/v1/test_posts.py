# mypy: ignore-errors
"""Tests for post endpoints."""

from datetime import timedelta

from fastapi import status



def _create(client, headers, **overrides):
    payload = {
        "title": "Misfire on cylinder 3",
        "body": "Swapped coils, still misfiring.",
        "category_slug": "engine",
    }
    payload.update(overrides)
    return client.post("/api/v1/posts/", json=payload, headers=headers)


def test_create_post_auto_upvotes(client, db_session, test_user, auth_token) -> None:
    """A new post starts at score 1 and credits the author one karma."""
    response = _create(client, auth_token, tags=["OBD2", "diagnostics", "obd2"])
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["score"] == 1
    assert body["author"]["username"] == test_user.username
    assert body["category"]["slug"] == "engine"
    assert sorted(tag["slug"] for tag in body["tags"]) == ["diagnostics", "obd2"]

    db_session.refresh(test_user)
    assert test_user.karma == 1


def test_unverified_user_cannot_post(client, unverified_user, headers_for) -> None:
    """Only verified mechanics may start threads."""
    response = _create(client, headers_for(unverified_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_create_post_validation(client, auth_token) -> None:
    """Blank titles and unknown categories are refused."""
    assert _create(client, auth_token, title="   ").status_code == status.HTTP_400_BAD_REQUEST
    assert _create(client, auth_token, title="").status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert _create(client, auth_token, title="x" * 301).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert _create(client, auth_token, category_slug="boats").status_code == status.HTTP_404_NOT_FOUND


def test_list_posts_pagination(client, make_post, test_user) -> None:
    """Fifteen posts at ten per page make two pages."""
    for i in range(15):
        make_post(test_user, title=f"Post {i}")

    first = client.get("/api/v1/posts/", params={"per_page": 10}).json()
    assert first["total_items"] == 15
    assert first["total_pages"] == 2
    assert first["has_next"] is True
    assert first["has_prev"] is False
    assert len(first["items"]) == 10

    second = client.get("/api/v1/posts/", params={"per_page": 10, "page": 2}).json()
    assert len(second["items"]) == 5
    assert second["has_next"] is False
    assert second["has_prev"] is True


def test_list_posts_sorting(client, db_session, make_post, test_user) -> None:
    """``top`` orders by score and ``new`` by recency."""
    older = make_post(test_user, title="Older")
    newer = make_post(test_user, title="Newer")
    older.score = 10
    older.created_at = newer.created_at - timedelta(hours=1)
    db_session.commit()

    top = client.get("/api/v1/posts/", params={"sort": "top"}).json()["items"]
    assert [p["id"] for p in top] == [older.id, newer.id]

    new = client.get("/api/v1/posts/", params={"sort": "new"}).json()["items"]
    assert [p["id"] for p in new] == [newer.id, older.id]


def test_pinned_posts_list_first(client, db_session, make_post, test_user) -> None:
    pinned = make_post(test_user, title="Read before posting")
    regular = make_post(test_user, title="Regular")
    regular.score = 50
    pinned.is_pinned = True
    db_session.commit()

    items = client.get("/api/v1/posts/").json()["items"]
    assert [p["id"] for p in items] == [pinned.id, regular.id]


def test_removed_posts_are_hidden(client, db_session, test_post) -> None:
    test_post.is_removed = True
    db_session.commit()
    assert client.get("/api/v1/posts/").json()["total_items"] == 0
    assert client.get(f"/api/v1/posts/{test_post.id}").status_code == status.HTTP_404_NOT_FOUND


def test_get_post_detail_with_threaded_comments(
    client, test_post, make_comment, test_user, other_user, auth_token
) -> None:
    """Post detail nests replies under their parents."""
    top = make_comment(test_post, other_user, body="Top level")
    make_comment(test_post, test_user, body="Reply", parent=top)

    response = client.get(f"/api/v1/posts/{test_post.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["user_vote"] == 1
    assert body["bookmarked"] is False
    assert body["comment_count"] == 2
    comments = body["comments"]
    assert len(comments) == 1
    assert comments[0]["depth"] == 0
    assert comments[0]["replies"][0]["body"] == "Reply"
    assert comments[0]["replies"][0]["depth"] == 1
    assert comments[0]["replies"][0]["user_vote"] == 1


def test_edit_post_sets_edited_at(client, test_post, auth_token) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": "Misfire solved"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Misfire solved"
    assert response.json()["edited_at"] is not None


def test_other_user_cannot_edit_or_delete(client, test_post, other_auth_token) -> None:
    assert client.put(
        f"/api/v1/posts/{test_post.id}", json={"body": "hijack"}, headers=other_auth_token
    ).status_code == status.HTTP_403_FORBIDDEN
    assert client.delete(
        f"/api/v1/posts/{test_post.id}", headers=other_auth_token
    ).status_code == status.HTTP_403_FORBIDDEN


def test_moderator_can_delete_post(client, db_session, test_post, moderator_user, headers_for) -> None:
    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=headers_for(moderator_user))
    assert response.status_code == status.HTTP_204_NO_CONTENT
    db_session.refresh(test_post)
    assert test_post.is_removed is True


def test_best_answer_toggle_and_notification(
    client, db_session, test_post, make_comment, other_user, auth_token, other_auth_token
) -> None:
    """The author can mark and unmark an answer; the answerer is notified."""
    answer = make_comment(test_post, other_user, body="Replace the plug wire")
    url = f"/api/v1/posts/{test_post.id}/best-answer"

    assert client.post(url, json={"comment_id": answer.id}, headers=other_auth_token).status_code == (
        status.HTTP_403_FORBIDDEN
    )

    marked = client.post(url, json={"comment_id": answer.id}, headers=auth_token)
    assert marked.json()["best_answer_id"] == answer.id
    kinds = [n["kind"] for n in client.get("/api/v1/notifications/", headers=other_auth_token).json()["items"]]
    assert kinds == ["best_answer"]

    cleared = client.post(url, json={"comment_id": answer.id}, headers=auth_token)
    assert cleared.json()["best_answer_id"] is None


def test_category_listing(client, test_post) -> None:
    categories = client.get("/api/v1/categories").json()
    assert {"Engine", "Brakes", "Transmission", "Electrical", "Suspension"} <= {c["name"] for c in categories}

    engine = client.get("/api/v1/categories/engine").json()
    assert engine["category"]["name"] == "Engine"
    assert engine["posts"]["items"][0]["id"] == test_post.id

    assert client.get("/api/v1/categories/boats").status_code == status.HTTP_404_NOT_FOUND
