"""Service-level helpers for creating and managing posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.db.time import utcnow
from wrench_forum.models import Comment, NotificationKind, Post, User, VoteTarget
from wrench_forum.repositories.post_repo import PostRepository
from wrench_forum.schemas.post import PostCreate, PostUpdate
from wrench_forum.services.categories import get_category_by_slug, resolve_tags
from wrench_forum.services.errors import InvalidInputError, NotFoundError, PermissionDeniedError
from wrench_forum.services.notifications import notify
from wrench_forum.services.voting import record_author_vote

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 300


def get_post_or_404(db: Session, post_id: int) -> Post:
    post = PostRepository(db).get_visible(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _clean_title(title: str) -> str:
    title = title.strip()
    if not title or len(title) > TITLE_MAX_LENGTH:
        raise InvalidInputError(f"Title must be between 1 and {TITLE_MAX_LENGTH} characters")
    return title


def _clean_body(body: str) -> str:
    body = body.strip()
    if not body:
        raise InvalidInputError("Body cannot be empty")
    return body


def create_post(db: Session, *, author: User, data: PostCreate) -> Post:
    """Create a post together with the author's implicit upvote.

    Args:
        db: Database session.
        author: User creating the post.
        data: Validated request payload.

    Returns:
        The persisted post with ``score == 1``.

    Raises:
        PermissionDeniedError: If the author is not allowed to post.
        InvalidInputError: If the title or body is blank.
        NotFoundError: If the category does not exist.
    """
    if not author.can_post:
        raise PermissionDeniedError("Only verified mechanics can create posts")
    title = _clean_title(data.title)
    body = _clean_body(data.body)

    with unit_of_work(db):
        category = get_category_by_slug(db, data.category_slug)
        if category is None:
            raise NotFoundError("Category not found")
        post = Post(
            user_id=author.id,
            category_id=category.id,
            title=title,
            body=body,
            score=1,
        )
        post.tags = resolve_tags(db, data.tags)
        db.add(post)
        db.flush()
        record_author_vote(db, kind=VoteTarget.POST, target_id=post.id, author_id=author.id)
    db.refresh(author)
    logger.info("User %s created post %s in %s", author.id, post.id, category.slug)
    return post


def _ensure_can_modify(post: Post, user: User) -> None:
    if post.user_id != user.id and not user.can_moderate:
        raise PermissionDeniedError("You cannot modify this post")


def update_post(db: Session, *, post_id: int, user: User, data: PostUpdate) -> Post:
    """Edit a post's title, body or tags and stamp ``edited_at``."""
    with unit_of_work(db):
        post = get_post_or_404(db, post_id)
        _ensure_can_modify(post, user)
        if data.title is not None:
            post.title = _clean_title(data.title)
        if data.body is not None:
            post.body = _clean_body(data.body)
        if data.tags is not None:
            post.tags = resolve_tags(db, data.tags)
        post.edited_at = utcnow()
    return post


def delete_post(db: Session, *, post_id: int, user: User) -> None:
    """Soft-remove a post on behalf of its author or a moderator."""
    with unit_of_work(db):
        post = get_post_or_404(db, post_id)
        _ensure_can_modify(post, user)
        post.is_removed = True
    logger.info("Post %s removed by user %s", post_id, user.id)


def set_best_answer(db: Session, *, post_id: int, user: User, comment_id: int) -> Post:
    """Mark a comment as the post's answer, or clear it when already marked.

    Raises:
        PermissionDeniedError: If ``user`` is not the post's author.
        InvalidInputError: If the comment belongs to another post.
        NotFoundError: If the post or comment is missing.
    """
    with unit_of_work(db):
        post = get_post_or_404(db, post_id)
        if post.user_id != user.id:
            raise PermissionDeniedError("Only the author can choose the best answer")
        comment = db.get(Comment, comment_id)
        if comment is None or comment.is_removed:
            raise NotFoundError("Comment not found")
        if comment.post_id != post.id:
            raise InvalidInputError("Comment belongs to a different post")

        if post.best_answer_id == comment.id:
            post.best_answer_id = None
        else:
            post.best_answer_id = comment.id
            if comment.user_id != user.id:
                notify(
                    db,
                    recipient_id=comment.user_id,
                    kind=NotificationKind.BEST_ANSWER,
                    content=f"Your answer was marked best on \"{post.title}\"",
                    related_post_id=post.id,
                    related_comment_id=comment.id,
                    actor_id=user.id,
                )
    return post
