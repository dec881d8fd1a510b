"""Site-wide announcements."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.db.time import utcnow
from wrench_forum.models import Announcement, User
from wrench_forum.schemas.announcement import AnnouncementCreate
from wrench_forum.services.activity import log_activity
from wrench_forum.services.errors import NotFoundError


def create_announcement(
    db: Session, *, admin: User, data: AnnouncementCreate, ip_address: str | None = None
) -> Announcement:
    expires_at = None
    if data.expires_days is not None:
        expires_at = utcnow() + timedelta(days=data.expires_days)
    with unit_of_work(db):
        announcement = Announcement(
            title=data.title.strip(),
            content=data.content.strip(),
            announcement_type=data.announcement_type or "info",
            created_by=admin.id,
            expires_at=expires_at,
        )
        db.add(announcement)
        db.flush()
        log_activity(db, user_id=admin.id, action="create_announcement",
                     target_type="announcement", target_id=announcement.id,
                     details=announcement.title, ip_address=ip_address)
    return announcement


def active_announcements(db: Session) -> Sequence[Announcement]:
    """Return announcements that are switched on and not yet expired."""
    return db.scalars(
        select(Announcement)
        .where(
            Announcement.is_active.is_(True),
            or_(Announcement.expires_at.is_(None), Announcement.expires_at > utcnow()),
        )
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
    ).all()


def deactivate_announcement(
    db: Session, *, admin: User, announcement_id: int, ip_address: str | None = None
) -> Announcement:
    with unit_of_work(db):
        announcement = db.get(Announcement, announcement_id)
        if announcement is None:
            raise NotFoundError("Announcement not found")
        announcement.is_active = False
        log_activity(db, user_id=admin.id, action="deactivate_announcement",
                     target_type="announcement", target_id=announcement.id,
                     ip_address=ip_address)
    return announcement
