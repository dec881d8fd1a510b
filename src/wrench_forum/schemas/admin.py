"""Admin console schemas."""

from pydantic import BaseModel

from .announcement import AnnouncementResponse
from .moderation import ActivityLogResponse, VerificationResponse
from .user import UserResponse


class SiteStats(BaseModel):
    total_users: int
    total_posts: int
    total_comments: int
    total_stores: int
    pending_reports: int
    pending_verifications: int


class AdminPanel(BaseModel):
    stats: SiteStats
    users: list[UserResponse]
    pending_verifications: list[VerificationResponse]
    announcements: list[AnnouncementResponse]
    recent_activity: list[ActivityLogResponse]
