"""Bookmark endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from wrench_forum.repositories.post_repo import PostRepository
from wrench_forum.schemas.post import PostResponse
from wrench_forum.services.bookmarks import toggle_bookmark

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=list[PostResponse])
async def list_bookmarks(current_user: CurrentUserDep, db: SessionDep) -> list[PostResponse]:
    """Return the caller's saved posts, most recently saved first."""
    posts = PostRepository(db).list_bookmarked(current_user.id)
    return [PostResponse.model_validate(post) for post in posts]


@router.post("/{post_id}")
async def toggle(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, bool]:
    """Save a post, or unsave it if already saved."""
    bookmarked = toggle_bookmark(db, user_id=current_user.id, post_id=post_id)
    return {"bookmarked": bookmarked}
