"""Search endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from wrench_forum.core.settings import settings
from wrench_forum.repositories.post_repo import PostRepository
from wrench_forum.schemas.post import PostResponse
from wrench_forum.schemas.search import (
    GlobalSearchResponse,
    PostSearchResponse,
    StoreSearchResponse,
    Suggestion,
)
from wrench_forum.services import search as search_service
from wrench_forum.services import stores as store_service

from ..dependencies import OptionalUserDep, SessionDep

router = APIRouter(prefix="/search", tags=["search"])

QueryParam = Annotated[str, Query(max_length=200)]


@router.get("/", response_model=GlobalSearchResponse)
async def global_search(db: SessionDep, q: QueryParam = "") -> GlobalSearchResponse:
    """Search posts, stores and members at once."""
    return GlobalSearchResponse(query=q, results=search_service.global_search(db, q))


@router.get("/posts", response_model=PostSearchResponse)
async def search_posts(
    db: SessionDep,
    q: QueryParam = "",
    category: str | None = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> PostSearchResponse:
    """Search post titles and bodies, optionally within a category."""
    query = q.strip()
    posts = []
    if query:
        posts = PostRepository(db).search(
            query, category_slug=category, limit=limit or settings.search_limit
        )
    return PostSearchResponse(query=q, items=[PostResponse.model_validate(p) for p in posts])


@router.get("/stores", response_model=StoreSearchResponse)
async def search_stores(
    db: SessionDep, current_user: OptionalUserDep, q: QueryParam = ""
) -> StoreSearchResponse:
    query = q.strip()
    stores = store_service.search_stores(db, query, limit=settings.search_limit) if query else []
    return StoreSearchResponse(
        query=q, items=store_service.to_responses(db, stores, viewer=current_user)
    )


@router.get("/suggestions", response_model=list[Suggestion])
async def suggestions(db: SessionDep, q: QueryParam = "") -> list[Suggestion]:
    """Type-ahead suggestions; needs at least two characters."""
    return search_service.suggestions(db, q)
