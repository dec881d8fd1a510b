"""Moderation services for Wrench Forum.

Every state change made here is written to the activity log in the same
transaction as the change itself.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.models import Comment, Post, Report, User
from wrench_forum.models.moderation import REPORT_TARGET_COMMENT, REPORT_TARGET_POST
from wrench_forum.services.activity import log_activity
from wrench_forum.services.errors import InvalidInputError, NotFoundError, PermissionDeniedError
from wrench_forum.services.user_service import delete_user_sessions

logger = logging.getLogger(__name__)


def _require_moderator(user: User) -> None:
    if not user.can_moderate:
        raise PermissionDeniedError("Moderator access required")


class ModerationService:
    """Service handling reports and moderator actions."""

    @staticmethod
    def report(
        db: Session,
        *,
        reporter: User,
        target_type: str,
        target_id: int,
        reason: str,
    ) -> Report:
        """File a report against a post or comment.

        Args:
            db: Database session
            reporter: User filing the report
            target_type: ``"post"`` or ``"comment"``
            target_id: ID of the reported content
            reason: Free-text explanation

        Raises:
            InvalidInputError: If the reason is blank or the type is unknown
            NotFoundError: If the reported content does not exist
        """
        reason = reason.strip()
        if not reason:
            raise InvalidInputError("A reason is required")

        with unit_of_work(db):
            if target_type == REPORT_TARGET_POST:
                if db.get(Post, target_id) is None:
                    raise NotFoundError("Post not found")
                report = Report(reporter_id=reporter.id, target_type=target_type,
                                post_id=target_id, reason=reason)
            elif target_type == REPORT_TARGET_COMMENT:
                if db.get(Comment, target_id) is None:
                    raise NotFoundError("Comment not found")
                report = Report(reporter_id=reporter.id, target_type=target_type,
                                comment_id=target_id, reason=reason)
            else:
                raise InvalidInputError("Unknown report target")
            db.add(report)
        logger.info("User %s reported %s %s", reporter.id, target_type, target_id)
        return report

    @staticmethod
    def unresolved_reports(db: Session) -> Sequence[Report]:
        """Return open reports, oldest first."""
        return db.scalars(
            select(Report)
            .where(Report.resolved.is_(False))
            .order_by(Report.created_at.asc(), Report.id.asc())
        ).all()

    @staticmethod
    def banned_users(db: Session) -> Sequence[User]:
        """Return banned members, alphabetically."""
        return db.scalars(
            select(User).where(User.is_banned.is_(True)).order_by(User.username)
        ).all()

    @staticmethod
    def resolve_report(
        db: Session, *, moderator: User, report_id: int, ip_address: str | None = None
    ) -> Report:
        _require_moderator(moderator)
        with unit_of_work(db):
            report = db.get(Report, report_id)
            if report is None:
                raise NotFoundError("Report not found")
            report.resolved = True
            report.resolved_by = moderator.id
            log_activity(db, user_id=moderator.id, action="resolve_report",
                         target_type="report", target_id=report.id, ip_address=ip_address)
        return report

    @staticmethod
    def set_post_removed(
        db: Session,
        *,
        moderator: User,
        post_id: int,
        removed: bool,
        ip_address: str | None = None,
    ) -> Post:
        """Remove or restore a post."""
        _require_moderator(moderator)
        with unit_of_work(db):
            post = db.get(Post, post_id)
            if post is None:
                raise NotFoundError("Post not found")
            post.is_removed = removed
            log_activity(
                db,
                user_id=moderator.id,
                action="remove_post" if removed else "restore_post",
                target_type="post",
                target_id=post.id,
                details=post.title,
                ip_address=ip_address,
            )
        return post

    @staticmethod
    def set_post_pinned(
        db: Session,
        *,
        moderator: User,
        post_id: int,
        pinned: bool,
        ip_address: str | None = None,
    ) -> Post:
        _require_moderator(moderator)
        with unit_of_work(db):
            post = db.get(Post, post_id)
            if post is None or post.is_removed:
                raise NotFoundError("Post not found")
            post.is_pinned = pinned
            log_activity(
                db,
                user_id=moderator.id,
                action="pin_post" if pinned else "unpin_post",
                target_type="post",
                target_id=post.id,
                ip_address=ip_address,
            )
        return post

    @staticmethod
    def remove_comment(
        db: Session, *, moderator: User, comment_id: int, ip_address: str | None = None
    ) -> Comment:
        _require_moderator(moderator)
        with unit_of_work(db):
            comment = db.get(Comment, comment_id)
            if comment is None:
                raise NotFoundError("Comment not found")
            comment.is_removed = True
            log_activity(db, user_id=moderator.id, action="remove_comment",
                         target_type="comment", target_id=comment.id, ip_address=ip_address)
        return comment

    @staticmethod
    def ban_user(
        db: Session,
        *,
        moderator: User,
        user_id: int,
        reason: str,
        ip_address: str | None = None,
    ) -> User:
        """Ban a user and end all of their sessions.

        Raises:
            InvalidInputError: If the moderator tries to ban themselves
            PermissionDeniedError: If a non-admin tries to ban an admin
            NotFoundError: If the user does not exist
        """
        _require_moderator(moderator)
        if user_id == moderator.id:
            raise InvalidInputError("You cannot ban yourself")
        with unit_of_work(db):
            user = db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")
            if user.is_admin and not moderator.is_admin:
                raise PermissionDeniedError("Only admins can ban admins")
            user.is_banned = True
            user.ban_reason = reason.strip() or None
            delete_user_sessions(db, user.id)
            log_activity(db, user_id=moderator.id, action="ban_user", target_type="user",
                         target_id=user.id, details=user.ban_reason, ip_address=ip_address)
        logger.warning("User %s banned by %s", user_id, moderator.id)
        return user

    @staticmethod
    def unban_user(
        db: Session, *, moderator: User, user_id: int, ip_address: str | None = None
    ) -> User:
        _require_moderator(moderator)
        with unit_of_work(db):
            user = db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")
            user.is_banned = False
            user.ban_reason = None
            log_activity(db, user_id=moderator.id, action="unban_user", target_type="user",
                         target_id=user.id, ip_address=ip_address)
        return user
