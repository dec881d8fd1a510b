"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class PageMeta(BaseModel):
    """Page-number pagination details returned by list endpoints."""

    page: int = Field(..., ge=1)
    per_page: int = Field(..., ge=1)
    total_items: int
    total_pages: int
    has_next: bool
    has_prev: bool
