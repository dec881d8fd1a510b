"""Post-related endpoints for the Wrench Forum API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from wrench_forum.core.settings import settings
from wrench_forum.models import VoteTarget
from wrench_forum.repositories.post_repo import Page, PostRepository, PostSort
from wrench_forum.schemas.comment import CommentCreate, CommentResponse
from wrench_forum.schemas.post import (
    BestAnswerRequest,
    PostCreate,
    PostDetailResponse,
    PostPage,
    PostResponse,
    PostUpdate,
)
from wrench_forum.schemas.user import UserSummary
from wrench_forum.services import comment_service, post_service
from wrench_forum.services.bookmarks import is_bookmarked
from wrench_forum.services.categories import get_category_by_slug
from wrench_forum.services.comment_service import CommentSort
from wrench_forum.services.errors import NotFoundError
from wrench_forum.services.voting import get_user_vote

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


def to_post_page(page: Page) -> PostPage:
    """Convert a repository page of posts to an API schema."""
    return PostPage(
        items=[PostResponse.model_validate(post) for post in page.items],
        page=page.page,
        per_page=page.per_page,
        total_items=page.total_items,
        total_pages=page.total_pages,
        has_next=page.has_next,
        has_prev=page.has_prev,
    )


@router.get("/", response_model=PostPage)
async def list_posts(
    db: SessionDep,
    sort: PostSort = PostSort.HOT,
    category: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int | None, Query(ge=1)] = None,
) -> PostPage:
    """List visible posts.

    Args:
        db: Database session
        sort: ``hot`` (default), ``top`` or ``new``
        category: Optional category slug to filter by
        page: 1-based page number
        per_page: Page size, capped by configuration

    Returns:
        One page of posts with pagination details
    """
    category_id = None
    if category:
        found = get_category_by_slug(db, category)
        if found is None:
            raise NotFoundError("Category not found")
        category_id = found.id
    size = min(per_page or settings.posts_per_page, settings.max_per_page)
    result = PostRepository(db).list_page(
        page=page, per_page=size, sort=sort, category_id=category_id
    )
    return to_post_page(result)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Create a new post. Only verified mechanics, moderators and admins may post."""
    post = post_service.create_post(db, author=current_user, data=post_data)
    return PostResponse.model_validate(post)


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
    comment_sort: CommentSort = CommentSort.BEST,
) -> PostDetailResponse:
    """Return a post with its threaded comments.

    Args:
        post_id: ID of the post
        db: Database session
        current_user: Signed-in user, if any, for vote and bookmark state
        comment_sort: ``best`` (default), ``new``, ``old`` or ``controversial``

    Raises:
        NotFoundError: If the post does not exist or was removed
    """
    post = post_service.get_post_or_404(db, post_id)
    comments = comment_service.build_thread(db, post, sort=comment_sort, viewer=current_user)
    user_vote = 0
    bookmarked = False
    if current_user is not None:
        user_vote = get_user_vote(
            db, user_id=current_user.id, kind=VoteTarget.POST, target_id=post.id
        )
        bookmarked = is_bookmarked(db, user_id=current_user.id, post_id=post.id)
    return PostDetailResponse(
        post=PostResponse.model_validate(post),
        comments=comments,
        comment_count=comment_service.count_comments(db, post.id),
        user_vote=user_vote,
        bookmarked=bookmarked,
    )


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Edit a post. Allowed for the author and moderators."""
    post = post_service.update_post(db, post_id=post_id, user=current_user, data=post_data)
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Remove a post. Allowed for the author and moderators."""
    post_service.delete_post(db, post_id=post_id, user=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/best-answer", response_model=PostResponse)
async def set_best_answer(
    post_id: int,
    payload: BestAnswerRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Mark a comment as the accepted answer, or unmark it if already chosen."""
    post = post_service.set_best_answer(
        db, post_id=post_id, user=current_user, comment_id=payload.comment_id
    )
    return PostResponse.model_validate(post)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    post_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
    sort: CommentSort = CommentSort.BEST,
) -> list[CommentResponse]:
    """Return the comment thread of a post."""
    post = post_service.get_post_or_404(db, post_id)
    return comment_service.build_thread(db, post, sort=sort, viewer=current_user)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Reply to a post or to one of its comments."""
    post = post_service.get_post_or_404(db, post_id)
    comment = comment_service.create_comment(
        db,
        post=post,
        author=current_user,
        body=comment_data.body,
        parent_id=comment_data.parent_id,
    )
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        parent_id=comment.parent_id,
        body=comment.body,
        score=comment.score,
        author=UserSummary.model_validate(current_user),
        created_at=comment.created_at,
        edited_at=comment.edited_at,
        user_vote=1,
    )
