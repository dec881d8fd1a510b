"""Search result schemas."""

from typing import Literal

from pydantic import BaseModel

from .post import PostResponse
from .store import StoreResponse


class SearchResult(BaseModel):
    """One hit in the unified search listing."""

    result_type: Literal["post", "store", "user"]
    id: int
    title: str
    url: str
    snippet: str | None = None


class GlobalSearchResponse(BaseModel):
    query: str
    results: list[SearchResult]


class PostSearchResponse(BaseModel):
    query: str
    items: list[PostResponse]


class StoreSearchResponse(BaseModel):
    query: str
    items: list[StoreResponse]


class Suggestion(BaseModel):
    kind: Literal["post", "user"]
    text: str
    url: str
