"""Member profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from wrench_forum.core.settings import settings
from wrench_forum.models import User
from wrench_forum.repositories.post_repo import PostRepository
from wrench_forum.schemas.comment import CommentResponse
from wrench_forum.schemas.post import PostResponse
from wrench_forum.schemas.user import (
    ProfileResponse,
    ProfileUpdate,
    UserStatsResponse,
    UserSummary,
)
from wrench_forum.services import comment_service, user_service
from wrench_forum.services.errors import NotFoundError

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])

RECENT_POSTS_LIMIT = 10

LimitParam = Annotated[int | None, Query(ge=1)]


class PublicProfile(BaseModel):
    user: UserSummary
    profile: ProfileResponse
    stats: UserStatsResponse
    recent_posts: list[PostResponse]


def _get_member_or_404(db: Session, username: str) -> User:
    user = user_service.get_user_by_username(db, username)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _page_size(limit: int | None) -> int:
    return min(limit or settings.posts_per_page, settings.max_per_page)


@router.get("/me/profile", response_model=ProfileResponse)
async def get_my_profile(current_user: CurrentUserDep) -> ProfileResponse:
    if current_user.profile is None:
        return ProfileResponse()
    return ProfileResponse.model_validate(current_user.profile)


@router.put("/me/profile", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ProfileResponse:
    """Update bio, specialties, location or website."""
    profile = user_service.update_profile(db, current_user, payload)
    return ProfileResponse.model_validate(profile)


@router.get("/{username}", response_model=PublicProfile)
async def get_public_profile(username: str, db: SessionDep) -> PublicProfile:
    """Return a member's public page.

    Args:
        username: Member to look up
        db: Database session

    Raises:
        NotFoundError: If no such member exists
    """
    user = _get_member_or_404(db, username)
    stats = user_service.user_stats(db, user)
    posts = PostRepository(db).list_by_user(user.id, limit=RECENT_POSTS_LIMIT)
    profile = (
        ProfileResponse.model_validate(user.profile) if user.profile else ProfileResponse()
    )
    return PublicProfile(
        user=UserSummary.model_validate(user),
        profile=profile,
        stats=UserStatsResponse.model_validate(stats),
        recent_posts=[PostResponse.model_validate(p) for p in posts],
    )


@router.get("/{username}/posts", response_model=list[PostResponse])
async def list_member_posts(
    username: str, db: SessionDep, limit: LimitParam = None
) -> list[PostResponse]:
    """Return a member's visible posts, newest first."""
    user = _get_member_or_404(db, username)
    posts = PostRepository(db).list_by_user(user.id, limit=_page_size(limit))
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/{username}/comments", response_model=list[CommentResponse])
async def list_member_comments(
    username: str, db: SessionDep, limit: LimitParam = None
) -> list[CommentResponse]:
    """Return a member's visible comments, newest first."""
    user = _get_member_or_404(db, username)
    author = UserSummary.model_validate(user)
    return [
        CommentResponse(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            body=comment.body,
            score=comment.score,
            author=author,
            created_at=comment.created_at,
            edited_at=comment.edited_at,
        )
        for comment in comment_service.list_by_user(db, user.id, limit=_page_size(limit))
    ]
