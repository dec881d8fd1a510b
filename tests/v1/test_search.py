# mypy: ignore-errors
"""Tests for search endpoints."""


def test_global_search_finds_posts_stores_and_users(client, make_post, test_user, test_store) -> None:
    make_post(test_user, title="Rockauto brake pads arrived wrong")
    results = client.get("/api/v1/search/", params={"q": "rock"}).json()["results"]
    assert {r["result_type"] for r in results} == {"post", "store"}

    users = client.get("/api/v1/search/", params={"q": "alic"}).json()["results"]
    assert [r["title"] for r in users if r["result_type"] == "user"] == ["alice"]


def test_blank_query_returns_nothing(client, test_post) -> None:
    assert client.get("/api/v1/search/", params={"q": "  "}).json()["results"] == []
    assert client.get("/api/v1/search/posts").json()["items"] == []


def test_post_search_by_category(client, make_post, test_user) -> None:
    make_post(test_user, title="Grinding noise when braking")
    hits = client.get("/api/v1/search/posts", params={"q": "grinding", "category": "engine"}).json()
    assert len(hits["items"]) == 1
    misses = client.get("/api/v1/search/posts", params={"q": "grinding", "category": "brakes"}).json()
    assert misses["items"] == []


def test_store_search(client, test_store) -> None:
    items = client.get("/api/v1/search/stores", params={"q": "catalog"}).json()["items"]
    assert [s["name"] for s in items] == ["RockAuto"]


def test_suggestions_need_two_characters(client, make_post, test_user) -> None:
    make_post(test_user, title="Alternator whine")
    assert client.get("/api/v1/search/suggestions", params={"q": "a"}).json() == []
    suggestions = client.get("/api/v1/search/suggestions", params={"q": "al"}).json()
    assert {"kind": "post", "text": "Alternator whine", "url": suggestions[0]["url"]} in suggestions
    assert any(s["kind"] == "user" and s["text"] == "alice" for s in suggestions)
