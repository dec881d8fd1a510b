"""Store directory schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StoreCreate(BaseModel):
    """Schema for submitting a vendor to the directory."""

    name: str = Field(..., min_length=1, max_length=120)
    url: str = Field(..., min_length=1, max_length=500)
    description: str | None = Field(None, max_length=2000)
    category: str = Field("General", max_length=80)


class StoreResponse(BaseModel):
    """A store with its aggregated reliability."""

    id: int
    name: str
    url: str
    description: str | None = None
    category: str
    submitted_by: int
    created_at: datetime
    positive_votes: int = 0
    total_votes: int = 0
    reliability_score: float | None = None
    user_vote: bool | None = None

    model_config = ConfigDict(from_attributes=True)
