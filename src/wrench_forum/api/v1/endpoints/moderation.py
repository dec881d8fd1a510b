"""Moderation endpoints for the Wrench Forum API."""

from __future__ import annotations

from fastapi import APIRouter, status

from wrench_forum.schemas.moderation import BanRequest, PinRequest, ReportCreate, ReportResponse
from wrench_forum.schemas.post import PostResponse
from wrench_forum.schemas.user import UserResponse
from wrench_forum.services.moderation import ModerationService

from ..dependencies import ClientIpDep, CurrentUserDep, ModeratorDep, SessionDep

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("/reports", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    payload: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReportResponse:
    """Report a post or comment to the moderators.

    Args:
        payload: Target and reason
        current_user: Authenticated reporter
        db: Database session

    Returns:
        The stored report
    """
    report = ModerationService.report(
        db,
        reporter=current_user,
        target_type=payload.target_type,
        target_id=payload.target_id,
        reason=payload.reason,
    )
    return ReportResponse.model_validate(report)


@router.get("/reports", response_model=list[ReportResponse])
async def list_reports(moderator: ModeratorDep, db: SessionDep) -> list[ReportResponse]:
    """Return unresolved reports, oldest first."""
    return [ReportResponse.model_validate(r) for r in ModerationService.unresolved_reports(db)]


@router.post("/reports/{report_id}/resolve", response_model=ReportResponse)
async def resolve_report(
    report_id: int, moderator: ModeratorDep, db: SessionDep, client_ip: ClientIpDep
) -> ReportResponse:
    report = ModerationService.resolve_report(
        db, moderator=moderator, report_id=report_id, ip_address=client_ip
    )
    return ReportResponse.model_validate(report)


@router.post("/posts/{post_id}/remove", response_model=PostResponse)
async def remove_post(
    post_id: int, moderator: ModeratorDep, db: SessionDep, client_ip: ClientIpDep
) -> PostResponse:
    post = ModerationService.set_post_removed(
        db, moderator=moderator, post_id=post_id, removed=True, ip_address=client_ip
    )
    return PostResponse.model_validate(post)


@router.post("/posts/{post_id}/restore", response_model=PostResponse)
async def restore_post(
    post_id: int, moderator: ModeratorDep, db: SessionDep, client_ip: ClientIpDep
) -> PostResponse:
    post = ModerationService.set_post_removed(
        db, moderator=moderator, post_id=post_id, removed=False, ip_address=client_ip
    )
    return PostResponse.model_validate(post)


@router.post("/posts/{post_id}/pin", response_model=PostResponse)
async def pin_post(
    post_id: int,
    payload: PinRequest,
    moderator: ModeratorDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> PostResponse:
    """Pin a post to the top of listings, or unpin it."""
    post = ModerationService.set_post_pinned(
        db, moderator=moderator, post_id=post_id, pinned=payload.pinned, ip_address=client_ip
    )
    return PostResponse.model_validate(post)


@router.post("/comments/{comment_id}/remove", status_code=status.HTTP_204_NO_CONTENT)
async def remove_comment(
    comment_id: int, moderator: ModeratorDep, db: SessionDep, client_ip: ClientIpDep
) -> None:
    ModerationService.remove_comment(
        db, moderator=moderator, comment_id=comment_id, ip_address=client_ip
    )


@router.get("/users/banned", response_model=list[UserResponse])
async def list_banned_users(moderator: ModeratorDep, db: SessionDep) -> list[UserResponse]:
    """Return banned members so moderators can review or lift bans."""
    return [UserResponse.model_validate(u) for u in ModerationService.banned_users(db)]


@router.post("/users/{user_id}/ban", response_model=UserResponse)
async def ban_user(
    user_id: int,
    payload: BanRequest,
    moderator: ModeratorDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> UserResponse:
    """Ban a user and sign them out everywhere."""
    user = ModerationService.ban_user(
        db, moderator=moderator, user_id=user_id, reason=payload.reason, ip_address=client_ip
    )
    return UserResponse.model_validate(user)


@router.post("/users/{user_id}/unban", response_model=UserResponse)
async def unban_user(
    user_id: int, moderator: ModeratorDep, db: SessionDep, client_ip: ClientIpDep
) -> UserResponse:
    user = ModerationService.unban_user(
        db, moderator=moderator, user_id=user_id, ip_address=client_ip
    )
    return UserResponse.model_validate(user)
