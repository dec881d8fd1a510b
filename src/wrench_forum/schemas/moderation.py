"""Moderation, reporting and verification schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ReportCreate(BaseModel):
    """Schema for flagging a post or comment."""

    target_type: Literal["post", "comment"]
    target_id: int
    reason: str = Field(..., max_length=1000)


class ReportResponse(BaseModel):
    id: int
    reporter_id: int
    target_type: str
    post_id: int | None = None
    comment_id: int | None = None
    reason: str
    resolved: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BanRequest(BaseModel):
    reason: str = Field("", max_length=500)


class PinRequest(BaseModel):
    pinned: bool = True


class VerificationCreate(BaseModel):
    proof_text: str = Field(..., max_length=5000)


class VerificationReview(BaseModel):
    note: str | None = Field(None, max_length=1000)


class VerificationResponse(BaseModel):
    id: int
    user_id: int
    proof_text: str
    status: str
    review_note: str | None = None
    created_at: datetime
    reviewed_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ActivityLogResponse(BaseModel):
    id: int
    user_id: int | None
    action: str
    target_type: str | None = None
    target_id: int | None = None
    details: str | None = None
    ip_address: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
