"""Site-wide counters for the admin console."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from wrench_forum.models import Comment, Report, Store, User, VerificationRequest
from wrench_forum.models.moderation import VERIFICATION_PENDING
from wrench_forum.repositories.post_repo import PostRepository
from wrench_forum.schemas.admin import SiteStats


def _count(db: Session, model, *filters) -> int:
    return db.scalar(select(func.count()).select_from(model).where(*filters)) or 0


def site_stats(db: Session) -> SiteStats:
    return SiteStats(
        total_users=_count(db, User),
        total_posts=PostRepository(db).count_visible(),
        total_comments=_count(db, Comment, Comment.is_removed.is_(False)),
        total_stores=_count(db, Store),
        pending_reports=_count(db, Report, Report.resolved.is_(False)),
        pending_verifications=_count(
            db, VerificationRequest, VerificationRequest.status == VERIFICATION_PENDING
        ),
    )
