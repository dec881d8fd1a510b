"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for voting on a post or comment."""

    value: int = Field(..., description="Positive for upvote, zero or negative for downvote")


class VoteResponse(BaseModel):
    score: int
    user_vote: int = Field(..., description="-1, 0 (no vote) or 1")


class StoreVoteCreate(BaseModel):
    positive: bool
