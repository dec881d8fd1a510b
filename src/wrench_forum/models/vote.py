# src/wrench_forum/models/vote.py
"""Models capturing voting interactions on posts and comments."""

from enum import Enum

from sqlalchemy import CheckConstraint, ForeignKey, Integer, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from wrench_forum.db.session import Base


class VoteTarget(str, Enum):
    """Kinds of content that carry a score."""

    POST = "post"
    COMMENT = "comment"


class Vote(Base):
    """Per-user vote on a post or comment."""

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_votes_value"),
        CheckConstraint("target_kind IN ('post', 'comment')", name="ck_votes_target_kind"),
        # At most one vote per user per target.
        UniqueConstraint("user_id", "target_kind", "target_id", name="uq_votes_user_target"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
