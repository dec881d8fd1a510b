"""Announcement schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    announcement_type: str = Field("info", max_length=32)
    expires_days: int | None = Field(None, ge=1, description="Days until the announcement expires")


class AnnouncementResponse(BaseModel):
    id: int
    title: str
    content: str
    announcement_type: str
    is_active: bool
    created_at: datetime
    expires_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
