# src/wrench_forum/models/user.py
"""User accounts, profiles and login sessions."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wrench_forum.db.session import Base
from wrench_forum.db.time import utcnow


class UserRole(str, Enum):
    """Account roles, from least to most privileged."""

    UNVERIFIED = "unverified"
    VERIFIED_MECHANIC = "verified_mechanic"
    MODERATOR = "moderator"
    ADMIN = "admin"


POSTING_ROLES = frozenset(
    {UserRole.VERIFIED_MECHANIC.value, UserRole.MODERATOR.value, UserRole.ADMIN.value}
)
MODERATING_ROLES = frozenset({UserRole.MODERATOR.value, UserRole.ADMIN.value})


class User(Base):
    """Registered forum member.

    ``karma`` is a denormalized counter equal to the sum of all live votes on
    the user's posts and comments; it is only adjusted incrementally.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=UserRole.UNVERIFIED.value
    )
    karma: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    flair: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ban_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    profile: Mapped["UserProfile | None"] = relationship(
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def can_post(self) -> bool:
        return self.role in POSTING_ROLES

    @property
    def can_vote_stores(self) -> bool:
        return self.role in POSTING_ROLES

    @property
    def can_moderate(self) -> bool:
        return self.role in MODERATING_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class UserProfile(Base):
    """Optional self-description shown on a member's public page."""

    __tablename__ = "user_profiles"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialties: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(120), nullable=True)
    website: Mapped[str | None] = mapped_column(String(300), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped[User] = relationship(back_populates="profile")


class AuthSession(Base):
    """Opaque login token bound to a user until ``expires_at``."""

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[User] = relationship()
