"""System endpoints: public configuration and announcements."""

from __future__ import annotations

from fastapi import APIRouter

from wrench_forum.core.settings import settings
from wrench_forum.schemas.announcement import AnnouncementResponse
from wrench_forum.services.announcements import active_announcements
from wrench_forum.services.stores import DEFAULT_STORE_CATEGORIES

from ..dependencies import SessionDep

router = APIRouter(tags=["system"])


@router.get("/system/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes connection strings; suitable for client UIs.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "sessions": {"ttl_days": settings.session_ttl_days},
        "voting": {"allow_self_votes": settings.allow_self_votes},
        "listing": {
            "posts_per_page": settings.posts_per_page,
            "max_per_page": settings.max_per_page,
        },
        "store_categories": list(DEFAULT_STORE_CATEGORIES),
    }


@router.get("/announcements", response_model=list[AnnouncementResponse])
async def list_announcements(db: SessionDep) -> list[AnnouncementResponse]:
    """Return announcements that are active and not expired."""
    return [AnnouncementResponse.model_validate(a) for a in active_announcements(db)]
