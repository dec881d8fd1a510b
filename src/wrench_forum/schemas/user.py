"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from wrench_forum.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for registering a new account."""

    username: str = Field(..., description="3-20 letters, digits or underscores")
    email: str
    password: str


class LoginRequest(BaseModel):
    """Credentials for signing in with either an email address or a username."""

    login: str = Field(..., validation_alias=AliasChoices("login", "email", "username"))
    password: str


class UserSummary(BaseModel):
    """Public view of a member, embedded in posts and comments."""

    id: int
    username: str
    role: str
    karma: int
    flair: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    """Full account details for the signed-in user or admins."""

    email: str
    is_banned: bool
    ban_reason: str | None = None
    created_at: datetime
    can_post: bool
    can_vote_stores: bool
    can_moderate: bool
    is_admin: bool


class SessionResponse(BaseModel):
    """Session token returned after login or registration."""

    token: str
    expires_at: datetime
    user: UserResponse


class ProfileUpdate(BaseModel):
    bio: str | None = Field(None, max_length=2000)
    specialties: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=120)
    website: str | None = Field(None, max_length=300)


class ProfileResponse(BaseModel):
    bio: str | None = None
    specialties: str | None = None
    location: str | None = None
    website: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserStatsResponse(BaseModel):
    post_count: int
    comment_count: int
    karma: int
    member_since: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    role: UserRole


class FlairUpdate(BaseModel):
    flair: str | None = Field(None, max_length=64)
