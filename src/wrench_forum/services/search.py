"""Search across posts, stores and members."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from wrench_forum.core.settings import settings
from wrench_forum.models import User
from wrench_forum.repositories.post_repo import PostRepository
from wrench_forum.schemas.search import SearchResult, Suggestion
from wrench_forum.services.stores import search_stores

SNIPPET_LENGTH = 160
SUGGESTION_MIN_LENGTH = 2


def _snippet(text: str | None) -> str | None:
    if not text:
        return None
    text = " ".join(text.split())
    if len(text) <= SNIPPET_LENGTH:
        return text
    return text[: SNIPPET_LENGTH - 3].rstrip() + "..."


def search_users(db: Session, query: str, limit: int) -> list[User]:
    return list(
        db.scalars(
            select(User)
            .where(User.username.ilike(f"%{query}%"), User.is_banned.is_(False))
            .order_by(User.karma.desc(), User.username)
            .limit(limit)
        )
    )


def global_search(db: Session, query: str, limit: int | None = None) -> list[SearchResult]:
    """Return posts, then stores, then users matching ``query``."""
    query = query.strip()
    if not query:
        return []
    limit = limit or settings.search_limit

    results: list[SearchResult] = []
    for post in PostRepository(db).search(query, limit=limit):
        results.append(
            SearchResult(
                result_type="post",
                id=post.id,
                title=post.title,
                url=f"/posts/{post.id}",
                snippet=_snippet(post.body),
            )
        )
    for store in search_stores(db, query, limit=limit):
        results.append(
            SearchResult(
                result_type="store",
                id=store.id,
                title=store.name,
                url=f"/stores/{store.id}",
                snippet=_snippet(store.description),
            )
        )
    for user in search_users(db, query, limit):
        results.append(
            SearchResult(
                result_type="user",
                id=user.id,
                title=user.username,
                url=f"/users/{user.username}",
                snippet=user.flair,
            )
        )
    return results


def suggestions(db: Session, query: str) -> list[Suggestion]:
    """Quick type-ahead matches; queries shorter than two characters get nothing."""
    query = query.strip()
    if len(query) < SUGGESTION_MIN_LENGTH:
        return []
    limit = settings.suggestion_limit
    found = [
        Suggestion(kind="post", text=title, url=f"/posts/{post_id}")
        for post_id, title in PostRepository(db).title_suggestions(query, limit)
    ]
    for user in search_users(db, query, limit):
        if len(found) >= limit:
            break
        found.append(Suggestion(kind="user", text=user.username, url=f"/users/{user.username}"))
    return found[:limit]
