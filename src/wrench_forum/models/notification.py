# src/wrench_forum/models/notification.py
"""In-app notifications."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wrench_forum.db.session import Base
from wrench_forum.db.time import utcnow

from .user import User


class NotificationKind(str, Enum):
    POST_REPLY = "post_reply"
    COMMENT_REPLY = "comment_reply"
    MENTION = "mention"
    BEST_ANSWER = "best_answer"
    VERIFICATION_APPROVED = "verification_approved"
    VERIFICATION_DENIED = "verification_denied"
    ANNOUNCEMENT = "announcement"


class Notification(Base):
    """Message delivered to a single recipient."""

    __tablename__ = "notifications"
    __table_args__ = (Index("ix_notifications_user_id_is_read", "user_id", "is_read"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    kind: Mapped[str] = mapped_column(String(32), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    related_post_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True
    )
    related_comment_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    actor_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    actor: Mapped[User | None] = relationship(foreign_keys=[actor_id])
