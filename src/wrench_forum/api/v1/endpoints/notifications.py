"""Notification endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from wrench_forum.schemas.notification import (
    NotificationList,
    NotificationResponse,
    UnreadCount,
)
from wrench_forum.services import notifications as notification_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationList)
async def list_notifications(current_user: CurrentUserDep, db: SessionDep) -> NotificationList:
    """Return the caller's newest notifications and unread count."""
    items = notification_service.list_notifications(db, current_user.id)
    return NotificationList(
        items=[NotificationResponse.model_validate(n) for n in items],
        unread_count=notification_service.unread_count(db, current_user.id),
    )


@router.get("/unread-count", response_model=UnreadCount)
async def unread_count(current_user: CurrentUserDep, db: SessionDep) -> UnreadCount:
    return UnreadCount(unread_count=notification_service.unread_count(db, current_user.id))


@router.post("/read-all", response_model=UnreadCount)
async def mark_all_read(current_user: CurrentUserDep, db: SessionDep) -> UnreadCount:
    notification_service.mark_all_read(db, current_user.id)
    return UnreadCount(unread_count=0)


@router.post("/{notification_id}/read", response_model=UnreadCount)
async def mark_read(
    notification_id: int, current_user: CurrentUserDep, db: SessionDep
) -> UnreadCount:
    """Mark one of the caller's notifications as read."""
    notification_service.mark_read(db, notification_id=notification_id, user_id=current_user.id)
    return UnreadCount(unread_count=notification_service.unread_count(db, current_user.id))
