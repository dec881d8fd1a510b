"""Bookmark toggling."""

from __future__ import annotations

from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.models import Bookmark
from wrench_forum.services.post_service import get_post_or_404


def toggle_bookmark(db: Session, *, user_id: int, post_id: int) -> bool:
    """Save or unsave a post; return True when it is bookmarked afterwards."""
    with unit_of_work(db):
        get_post_or_404(db, post_id)
        existing = db.get(Bookmark, (user_id, post_id))
        if existing is not None:
            db.delete(existing)
            return False
        db.add(Bookmark(user_id=user_id, post_id=post_id))
        return True


def is_bookmarked(db: Session, *, user_id: int, post_id: int) -> bool:
    return db.get(Bookmark, (user_id, post_id)) is not None
