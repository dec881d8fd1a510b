"""Audit logging of moderator and admin actions."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from wrench_forum.core.settings import settings
from wrench_forum.models import ActivityLog

logger = logging.getLogger(__name__)


def log_activity(
    db: Session,
    *,
    user_id: int | None,
    action: str,
    target_type: str | None = None,
    target_id: int | None = None,
    details: str | None = None,
    ip_address: str | None = None,
) -> ActivityLog:
    """Add an activity entry to the caller's transaction."""
    entry = ActivityLog(
        user_id=user_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=details,
        ip_address=ip_address,
    )
    db.add(entry)
    logger.info(
        "activity user=%s action=%s target=%s:%s",
        user_id,
        action,
        target_type,
        target_id,
    )
    return entry


def recent_activity(db: Session, limit: int | None = None) -> Sequence[ActivityLog]:
    """Return the newest activity entries."""
    return db.scalars(
        select(ActivityLog)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit or settings.activity_log_limit)
    ).all()
