"""Vote bookkeeping for posts and comments.

A user holds at most one vote per target. Casting the same direction twice
removes the vote, casting the opposite direction flips it. Every transition
adjusts the target's ``score`` and the owner's ``karma`` by the same delta so
both counters always equal the sum of live vote values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from wrench_forum.core.settings import settings
from wrench_forum.db.session import unit_of_work
from wrench_forum.models import Comment, Post, User, Vote, VoteTarget
from wrench_forum.services.errors import NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

_TARGET_MODELS: dict[VoteTarget, type[Post] | type[Comment]] = {
    VoteTarget.POST: Post,
    VoteTarget.COMMENT: Comment,
}


@dataclass(frozen=True)
class VoteResult:
    """Outcome of a vote transition."""

    score: int
    user_vote: int


def normalize_vote_value(raw_value: int) -> int:
    """Map any integer to a vote direction: positive is +1, everything else -1."""
    return 1 if raw_value > 0 else -1


def _get_target_or_404(db: Session, kind: VoteTarget, target_id: int) -> Post | Comment:
    model = _TARGET_MODELS[kind]
    target = db.get(model, target_id)
    if target is None or target.is_removed:
        raise NotFoundError(f"{kind.value.capitalize()} not found")
    return target


def _adjust_counters(
    db: Session,
    *,
    kind: VoteTarget,
    target_id: int,
    owner_id: int,
    delta: int,
) -> None:
    model = _TARGET_MODELS[kind]
    db.execute(
        update(model)
        .where(model.id == target_id)
        .values(score=model.score + delta)
        .execution_options(synchronize_session=False)
    )
    db.execute(
        update(User)
        .where(User.id == owner_id)
        .values(karma=User.karma + delta)
        .execution_options(synchronize_session=False)
    )


def record_author_vote(db: Session, *, kind: VoteTarget, target_id: int, author_id: int) -> None:
    """Record the implicit +1 an author gives newly created content.

    The caller inserts the target with ``score = 1``; this adds the matching
    vote row and credits the author's karma. It runs inside the caller's unit
    of work.
    """
    db.add(Vote(user_id=author_id, target_kind=kind.value, target_id=target_id, value=1))
    db.execute(
        update(User)
        .where(User.id == author_id)
        .values(karma=User.karma + 1)
        .execution_options(synchronize_session=False)
    )


def get_user_vote(db: Session, *, user_id: int, kind: VoteTarget, target_id: int) -> int:
    """Return the user's vote on a target, or 0 when they have none."""
    value = db.scalar(
        select(Vote.value).where(
            Vote.user_id == user_id,
            Vote.target_kind == kind.value,
            Vote.target_id == target_id,
        )
    )
    return value or 0


def get_user_votes(
    db: Session, *, user_id: int, kind: VoteTarget, target_ids: list[int]
) -> dict[int, int]:
    """Return ``{target_id: value}`` for the user's votes among ``target_ids``."""
    if not target_ids:
        return {}
    rows = db.execute(
        select(Vote.target_id, Vote.value).where(
            Vote.user_id == user_id,
            Vote.target_kind == kind.value,
            Vote.target_id.in_(target_ids),
        )
    )
    return {target_id: value for target_id, value in rows}


def apply_vote(
    db: Session,
    *,
    voter_id: int,
    target_id: int,
    kind: VoteTarget,
    requested_value: int,
) -> VoteResult:
    """Apply a vote transition and return the target's stored score afterwards.

    Args:
        db: Database session
        voter_id: ID of the voting user
        target_id: ID of the post or comment
        kind: Whether the target is a post or a comment
        requested_value: Raw direction; normalized to +1 or -1

    Returns:
        The re-read score and the voter's resulting vote (0 when toggled off)

    Raises:
        NotFoundError: If the target does not exist or was removed
        PermissionDeniedError: If self-votes are disabled and the voter owns the target
    """
    value = normalize_vote_value(requested_value)

    with unit_of_work(db):
        target = _get_target_or_404(db, kind, target_id)
        owner_id = target.user_id
        if owner_id == voter_id and not settings.allow_self_votes:
            raise PermissionDeniedError("You cannot vote on your own content")

        existing = db.scalars(
            select(Vote).where(
                Vote.user_id == voter_id,
                Vote.target_kind == kind.value,
                Vote.target_id == target_id,
            )
        ).first()

        if existing is None:
            db.add(Vote(user_id=voter_id, target_kind=kind.value, target_id=target_id, value=value))
            delta = value
            user_vote = value
        elif existing.value == value:
            db.delete(existing)
            delta = -value
            user_vote = 0
        else:
            delta = value - existing.value
            existing.value = value
            user_vote = value

        db.flush()
        _adjust_counters(db, kind=kind, target_id=target_id, owner_id=owner_id, delta=delta)
        score = db.scalar(
            select(_TARGET_MODELS[kind].score).where(_TARGET_MODELS[kind].id == target_id)
        )

    # Loaded instances still hold pre-update counters.
    db.expire_all()
    logger.info(
        "Vote on %s %s by user %s: delta=%+d score=%s",
        kind.value,
        target_id,
        voter_id,
        delta,
        score,
    )
    return VoteResult(score=score, user_vote=user_vote)
