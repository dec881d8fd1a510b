"""Data access helpers for working with posts."""
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from wrench_forum.models import Bookmark, Category, Post

__all__ = ["Page", "PostRepository", "PostSort"]

T = TypeVar("T")


class PostSort(str, Enum):
    """Listing orders for posts."""

    HOT = "hot"
    TOP = "top"
    NEW = "new"


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the numbers needed to render pagination."""

    items: Sequence[T]
    page: int
    per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_items / self.per_page))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier, including removed posts."""
        return self.session.get(Post, post_id)

    def get_visible(self, post_id: int) -> Post | None:
        """Return a post unless it has been removed by moderation."""
        post = self.get_by_id(post_id)
        if post is None or post.is_removed:
            return None
        return post

    @staticmethod
    def _ordered(stmt: Select, sort: PostSort) -> Select:
        stmt = stmt.order_by(Post.is_pinned.desc())
        if sort is PostSort.NEW:
            return stmt.order_by(Post.created_at.desc(), Post.id.desc())
        return stmt.order_by(Post.score.desc(), Post.created_at.desc(), Post.id.desc())

    def list_page(
        self,
        *,
        page: int,
        per_page: int,
        sort: PostSort = PostSort.HOT,
        category_id: int | None = None,
    ) -> Page[Post]:
        """Return one page of visible posts, pinned posts first."""
        filters = [Post.is_removed.is_(False)]
        if category_id is not None:
            filters.append(Post.category_id == category_id)

        total = self.session.scalar(
            select(func.count()).select_from(Post).where(*filters)
        ) or 0
        stmt = self._ordered(select(Post).where(*filters), sort)
        items = self.session.scalars(
            stmt.offset((page - 1) * per_page).limit(per_page)
        ).all()
        return Page(items=items, page=page, per_page=per_page, total_items=total)

    def list_by_user(self, user_id: int, limit: int = 10) -> Sequence[Post]:
        """Return a member's newest visible posts."""
        return self.session.scalars(
            select(Post)
            .where(Post.user_id == user_id, Post.is_removed.is_(False))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        ).all()

    def list_bookmarked(self, user_id: int) -> Sequence[Post]:
        """Return visible posts the user bookmarked, most recently saved first."""
        return self.session.scalars(
            select(Post)
            .join(Bookmark, Bookmark.post_id == Post.id)
            .where(Bookmark.user_id == user_id, Post.is_removed.is_(False))
            .order_by(Bookmark.created_at.desc(), Post.id.desc())
        ).all()

    def search(
        self,
        query: str,
        *,
        category_slug: str | None = None,
        limit: int = 20,
    ) -> Sequence[Post]:
        """Case-insensitive substring match on title and body."""
        pattern = f"%{query}%"
        stmt = select(Post).where(
            Post.is_removed.is_(False),
            or_(Post.title.ilike(pattern), Post.body.ilike(pattern)),
        )
        if category_slug:
            stmt = stmt.join(Category, Category.id == Post.category_id).where(
                Category.slug == category_slug
            )
        return self.session.scalars(
            stmt.order_by(Post.created_at.desc(), Post.id.desc()).limit(limit)
        ).all()

    def title_suggestions(self, fragment: str, limit: int) -> list[tuple[int, str]]:
        """Return (id, title) pairs of the best-scored posts whose title contains ``fragment``."""
        rows = self.session.execute(
            select(Post.id, Post.title)
            .where(Post.is_removed.is_(False), Post.title.ilike(f"%{fragment}%"))
            .order_by(Post.score.desc(), Post.id.desc())
            .limit(limit)
        )
        return [(post_id, title) for post_id, title in rows]

    def count_visible(self) -> int:
        return self.session.scalar(
            select(func.count()).select_from(Post).where(Post.is_removed.is_(False))
        ) or 0
