"""Admin console endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from wrench_forum.schemas.admin import AdminPanel, SiteStats
from wrench_forum.schemas.announcement import AnnouncementCreate, AnnouncementResponse
from wrench_forum.schemas.moderation import (
    ActivityLogResponse,
    VerificationResponse,
    VerificationReview,
)
from wrench_forum.schemas.user import FlairUpdate, RoleUpdate, UserResponse
from wrench_forum.services import announcements, user_service, verification
from wrench_forum.services.activity import recent_activity
from wrench_forum.services.stats import site_stats

from ..dependencies import AdminDep, ClientIpDep, SessionDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/", response_model=AdminPanel)
async def admin_panel(admin: AdminDep, db: SessionDep) -> AdminPanel:
    """Return everything the admin console shows on its front page."""
    return AdminPanel(
        stats=site_stats(db),
        users=[UserResponse.model_validate(u) for u in user_service.list_users(db)],
        pending_verifications=[
            VerificationResponse.model_validate(r) for r in verification.list_pending(db)
        ],
        announcements=[
            AnnouncementResponse.model_validate(a)
            for a in announcements.active_announcements(db)
        ],
        recent_activity=[ActivityLogResponse.model_validate(e) for e in recent_activity(db)],
    )


@router.get("/stats", response_model=SiteStats)
async def stats(admin: AdminDep, db: SessionDep) -> SiteStats:
    return site_stats(db)


@router.get("/activity", response_model=list[ActivityLogResponse])
async def activity(admin: AdminDep, db: SessionDep) -> list[ActivityLogResponse]:
    return [ActivityLogResponse.model_validate(e) for e in recent_activity(db)]


@router.get("/verifications", response_model=list[VerificationResponse])
async def pending_verifications(admin: AdminDep, db: SessionDep) -> list[VerificationResponse]:
    return [VerificationResponse.model_validate(r) for r in verification.list_pending(db)]


@router.post("/verifications/{request_id}/approve", response_model=VerificationResponse)
async def approve_verification(
    request_id: int,
    payload: VerificationReview,
    admin: AdminDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> VerificationResponse:
    """Approve a request; the member becomes a verified mechanic."""
    request = verification.approve_request(
        db, admin=admin, request_id=request_id, note=payload.note, ip_address=client_ip
    )
    return VerificationResponse.model_validate(request)


@router.post("/verifications/{request_id}/deny", response_model=VerificationResponse)
async def deny_verification(
    request_id: int,
    payload: VerificationReview,
    admin: AdminDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> VerificationResponse:
    request = verification.deny_request(
        db, admin=admin, request_id=request_id, note=payload.note, ip_address=client_ip
    )
    return VerificationResponse.model_validate(request)


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def change_role(
    user_id: int,
    payload: RoleUpdate,
    admin: AdminDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> UserResponse:
    """Assign a new role to another user."""
    user = user_service.change_role(
        db, admin=admin, user_id=user_id, role=payload.role, ip_address=client_ip
    )
    return UserResponse.model_validate(user)


@router.put("/users/{user_id}/flair", response_model=UserResponse)
async def set_flair(
    user_id: int,
    payload: FlairUpdate,
    admin: AdminDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> UserResponse:
    user = user_service.set_flair(
        db, admin=admin, user_id=user_id, flair=payload.flair, ip_address=client_ip
    )
    return UserResponse.model_validate(user)


@router.post(
    "/announcements",
    response_model=AnnouncementResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_announcement(
    payload: AnnouncementCreate,
    admin: AdminDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> AnnouncementResponse:
    announcement = announcements.create_announcement(
        db, admin=admin, data=payload, ip_address=client_ip
    )
    return AnnouncementResponse.model_validate(announcement)


@router.post("/announcements/{announcement_id}/deactivate", response_model=AnnouncementResponse)
async def deactivate_announcement(
    announcement_id: int,
    admin: AdminDep,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> AnnouncementResponse:
    announcement = announcements.deactivate_announcement(
        db, admin=admin, announcement_id=announcement_id, ip_address=client_ip
    )
    return AnnouncementResponse.model_validate(announcement)
