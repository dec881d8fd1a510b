"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .category import CategoryResponse, TagResponse
from .comment import CommentResponse
from .common import PageMeta
from .user import UserSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300)
    body: str = Field(..., min_length=1, description="Markdown content")
    category_slug: str = Field(..., description="Slug of the category to post in")
    tags: list[str] = Field(default_factory=list, max_length=10)


class PostUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=300)
    body: str | None = Field(None, min_length=1)
    tags: list[str] | None = Field(None, max_length=10)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    body: str
    score: int
    author: UserSummary
    category: CategoryResponse
    tags: list[TagResponse] = Field(default_factory=list)
    is_pinned: bool
    is_removed: bool
    best_answer_id: int | None = None
    created_at: datetime
    edited_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PostPage(PageMeta):
    items: list[PostResponse]


class PostDetailResponse(BaseModel):
    """A post with its comment thread and the caller's interaction state."""

    post: PostResponse
    comments: list[CommentResponse]
    comment_count: int
    user_vote: int = 0
    bookmarked: bool = False


class BestAnswerRequest(BaseModel):
    comment_id: int
