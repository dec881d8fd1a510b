"""Category and tag browsing endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel

from wrench_forum.core.settings import settings
from wrench_forum.repositories.post_repo import PostRepository, PostSort
from wrench_forum.schemas.category import CategoryResponse, TagResponse
from wrench_forum.schemas.post import PostPage
from wrench_forum.services import categories as category_service
from wrench_forum.services.errors import NotFoundError

from ..dependencies import SessionDep
from .posts import to_post_page

router = APIRouter(tags=["categories"])


class CategoryPage(BaseModel):
    category: CategoryResponse
    posts: PostPage


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(db: SessionDep) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in category_service.list_categories(db)]


@router.get("/categories/{slug}", response_model=CategoryPage)
async def get_category(
    slug: str,
    db: SessionDep,
    sort: PostSort = PostSort.HOT,
    page: Annotated[int, Query(ge=1)] = 1,
) -> CategoryPage:
    """Return a category and one page of its posts."""
    category = category_service.get_category_by_slug(db, slug)
    if category is None:
        raise NotFoundError("Category not found")
    posts = PostRepository(db).list_page(
        page=page, per_page=settings.posts_per_page, sort=sort, category_id=category.id
    )
    return CategoryPage(
        category=CategoryResponse.model_validate(category),
        posts=to_post_page(posts),
    )


@router.get("/tags", response_model=list[TagResponse])
async def list_tags(db: SessionDep) -> list[TagResponse]:
    return [TagResponse.model_validate(t) for t in category_service.list_tags(db)]
