"""Comment creation, editing and thread assembly."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.db.time import utcnow
from wrench_forum.models import Comment, Post, User, VoteTarget
from wrench_forum.schemas.comment import CommentResponse
from wrench_forum.schemas.user import UserSummary
from wrench_forum.services.comment_tree import CommentNode, thread_comments
from wrench_forum.services.errors import InvalidInputError, NotFoundError, PermissionDeniedError
from wrench_forum.services.notifications import fan_out_comment_notifications
from wrench_forum.services.voting import get_user_votes, record_author_vote

logger = logging.getLogger(__name__)


class CommentSort(str, Enum):
    BEST = "best"
    NEW = "new"
    OLD = "old"
    CONTROVERSIAL = "controversial"


_ORDERINGS = {
    CommentSort.BEST: (Comment.score.desc(), Comment.created_at.asc(), Comment.id.asc()),
    CommentSort.NEW: (Comment.created_at.desc(), Comment.id.desc()),
    CommentSort.OLD: (Comment.created_at.asc(), Comment.id.asc()),
    CommentSort.CONTROVERSIAL: (
        func.abs(Comment.score).asc(),
        Comment.created_at.asc(),
        Comment.id.asc(),
    ),
}


def get_comment_or_404(db: Session, comment_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None or comment.is_removed:
        raise NotFoundError("Comment not found")
    return comment


def list_comments(
    db: Session, post_id: int, sort: CommentSort = CommentSort.BEST
) -> Sequence[Comment]:
    """Return a post's visible comments as a flat list in ``sort`` order."""
    return db.scalars(
        select(Comment)
        .where(Comment.post_id == post_id, Comment.is_removed.is_(False))
        .order_by(*_ORDERINGS[sort])
    ).all()


def list_by_user(db: Session, user_id: int, limit: int) -> Sequence[Comment]:
    """Return a member's newest visible comments on visible posts."""
    return db.scalars(
        select(Comment)
        .join(Post, Post.id == Comment.post_id)
        .where(
            Comment.user_id == user_id,
            Comment.is_removed.is_(False),
            Post.is_removed.is_(False),
        )
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .limit(limit)
    ).all()


def count_comments(db: Session, post_id: int) -> int:
    return db.scalar(
        select(func.count()).select_from(Comment).where(
            Comment.post_id == post_id, Comment.is_removed.is_(False)
        )
    ) or 0


def _to_response(
    node: CommentNode[Comment], *, votes: dict[int, int], best_answer_id: int | None
) -> CommentResponse:
    comment = node.comment
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        parent_id=comment.parent_id,
        body=comment.body,
        score=comment.score,
        author=UserSummary.model_validate(comment.author),
        created_at=comment.created_at,
        edited_at=comment.edited_at,
        depth=node.depth,
        user_vote=votes.get(comment.id, 0),
        is_best_answer=best_answer_id == comment.id,
    )


def build_thread(
    db: Session,
    post: Post,
    *,
    sort: CommentSort = CommentSort.BEST,
    viewer: User | None = None,
) -> list[CommentResponse]:
    """Return the post's comments as nested responses with the viewer's votes."""
    comments = list_comments(db, post.id, sort)
    votes: dict[int, int] = {}
    if viewer is not None:
        votes = get_user_votes(
            db,
            user_id=viewer.id,
            kind=VoteTarget.COMMENT,
            target_ids=[comment.id for comment in comments],
        )

    roots: list[CommentResponse] = []
    stack: list[tuple[CommentNode[Comment], CommentResponse | None]] = [
        (node, None) for node in reversed(thread_comments(comments))
    ]
    while stack:
        node, parent = stack.pop()
        response = _to_response(node, votes=votes, best_answer_id=post.best_answer_id)
        if parent is None:
            roots.append(response)
        else:
            parent.replies.append(response)
        stack.extend((reply, response) for reply in reversed(node.replies))
    return roots


def create_comment(
    db: Session,
    *,
    post: Post,
    author: User,
    body: str,
    parent_id: int | None = None,
) -> Comment:
    """Create a comment with its author's upvote and notify interested users.

    Args:
        db: Database session
        post: Post being commented on
        author: Commenting user
        body: Comment text
        parent_id: Comment being replied to, if any

    Returns:
        The persisted comment

    Raises:
        PermissionDeniedError: If the author may not post
        InvalidInputError: If the body is blank or the parent is on another post
        NotFoundError: If the post or parent comment is gone
    """
    if not author.can_post:
        raise PermissionDeniedError("Only verified mechanics can comment")
    body = body.strip()
    if not body:
        raise InvalidInputError("Comment cannot be empty")
    if post.is_removed:
        raise NotFoundError("Post not found")

    with unit_of_work(db):
        parent: Comment | None = None
        if parent_id is not None:
            parent = get_comment_or_404(db, parent_id)
            if parent.post_id != post.id:
                raise InvalidInputError("Parent comment belongs to a different post")

        comment = Comment(
            post_id=post.id,
            user_id=author.id,
            parent_id=parent_id,
            body=body,
            score=1,
        )
        db.add(comment)
        db.flush()
        record_author_vote(db, kind=VoteTarget.COMMENT, target_id=comment.id, author_id=author.id)
        fan_out_comment_notifications(
            db, comment=comment, post=post, commenter=author, parent=parent
        )
    db.refresh(author)
    logger.info("User %s commented %s on post %s", author.id, comment.id, post.id)
    return comment


def _ensure_can_modify(comment: Comment, user: User) -> None:
    if comment.user_id != user.id and not user.can_moderate:
        raise PermissionDeniedError("You cannot modify this comment")


def update_comment(db: Session, *, comment_id: int, user: User, body: str) -> Comment:
    body = body.strip()
    if not body:
        raise InvalidInputError("Comment cannot be empty")
    with unit_of_work(db):
        comment = get_comment_or_404(db, comment_id)
        _ensure_can_modify(comment, user)
        comment.body = body
        comment.edited_at = utcnow()
    return comment


def delete_comment(db: Session, *, comment_id: int, user: User) -> None:
    """Soft-remove a comment; votes and karma stay as they were."""
    with unit_of_work(db):
        comment = get_comment_or_404(db, comment_id)
        _ensure_can_modify(comment, user)
        comment.is_removed = True
