# src/wrench_forum/models/bookmark.py
"""Saved posts."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from wrench_forum.db.session import Base
from wrench_forum.db.time import utcnow


class Bookmark(Base):
    __tablename__ = "bookmarks"

    # Composite primary key prevents bookmarking a post twice.
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
