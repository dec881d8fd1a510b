"""Notification creation, listing and read-state helpers."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from wrench_forum.core.settings import settings
from wrench_forum.db.session import unit_of_work
from wrench_forum.models import Comment, Notification, NotificationKind, Post, User
from wrench_forum.services.errors import NotFoundError

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@([A-Za-z0-9_]{3,20})")


def notify(
    db: Session,
    *,
    recipient_id: int,
    kind: NotificationKind,
    content: str,
    related_post_id: int | None = None,
    related_comment_id: int | None = None,
    actor_id: int | None = None,
) -> Notification:
    """Queue a notification in the caller's transaction."""
    notification = Notification(
        user_id=recipient_id,
        kind=kind.value,
        content=content,
        related_post_id=related_post_id,
        related_comment_id=related_comment_id,
        actor_id=actor_id,
    )
    db.add(notification)
    return notification


def extract_mentions(text: str) -> list[str]:
    """Return distinct ``@username`` handles in order of first appearance."""
    seen: dict[str, None] = {}
    for match in MENTION_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def fan_out_comment_notifications(
    db: Session,
    *,
    comment: Comment,
    post: Post,
    commenter: User,
    parent: Comment | None,
) -> list[Notification]:
    """Notify the post author, the replied-to author and mentioned users.

    Each recipient gets at most one notification per comment and the
    commenter is never notified about their own comment.
    """
    notified = {commenter.id}
    created: list[Notification] = []

    def _send(recipient_id: int, kind: NotificationKind, content: str) -> None:
        if recipient_id in notified:
            return
        notified.add(recipient_id)
        created.append(
            notify(
                db,
                recipient_id=recipient_id,
                kind=kind,
                content=content,
                related_post_id=post.id,
                related_comment_id=comment.id,
                actor_id=commenter.id,
            )
        )

    if parent is not None:
        _send(
            parent.user_id,
            NotificationKind.COMMENT_REPLY,
            f"{commenter.username} replied to your comment on \"{post.title}\"",
        )
    _send(
        post.user_id,
        NotificationKind.POST_REPLY,
        f"{commenter.username} commented on your post \"{post.title}\"",
    )

    handles = extract_mentions(comment.body)
    if handles:
        mentioned = db.scalars(select(User).where(User.username.in_(handles))).all()
        for user in mentioned:
            _send(
                user.id,
                NotificationKind.MENTION,
                f"{commenter.username} mentioned you in \"{post.title}\"",
            )

    return created


def list_notifications(db: Session, user_id: int, limit: int | None = None) -> Sequence[Notification]:
    """Return the user's newest notifications."""
    return db.scalars(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit or settings.notification_limit)
    ).all()


def unread_count(db: Session, user_id: int) -> int:
    return db.scalar(
        select(func.count())
        .select_from(Notification)
        .where(Notification.user_id == user_id, Notification.is_read.is_(False))
    ) or 0


def mark_read(db: Session, *, notification_id: int, user_id: int) -> None:
    """Mark one of the user's own notifications as read.

    Raises:
        NotFoundError: If the notification does not exist or belongs to someone else
    """
    with unit_of_work(db):
        notification = db.get(Notification, notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFoundError("Notification not found")
        notification.is_read = True


def mark_all_read(db: Session, user_id: int) -> int:
    """Mark every unread notification for the user as read and return how many."""
    with unit_of_work(db):
        result = db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
    db.expire_all()
    logger.debug("Marked %s notifications read for user %s", result.rowcount, user_id)
    return result.rowcount
