"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummary


class CommentCreate(BaseModel):
    """Schema for replying to a post or another comment."""

    body: str = Field(..., min_length=1, max_length=10000)
    parent_id: int | None = Field(None, description="Comment being replied to")


class CommentUpdate(BaseModel):
    body: str = Field(..., min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    """A comment and its nested replies."""

    id: int
    post_id: int
    parent_id: int | None
    body: str
    score: int
    author: UserSummary
    created_at: datetime
    edited_at: datetime | None = None
    depth: int = 0
    user_vote: int = 0
    is_best_answer: bool = False
    replies: list[CommentResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
