"""Notification schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    id: int
    kind: str
    content: str
    related_post_id: int | None = None
    related_comment_id: int | None = None
    actor_id: int | None = None
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationList(BaseModel):
    items: list[NotificationResponse]
    unread_count: int


class UnreadCount(BaseModel):
    unread_count: int
