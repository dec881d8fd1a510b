# src/wrench_forum/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    bookmarks_router,
    categories_router,
    comments_router,
    moderation_router,
    notifications_router,
    posts_router,
    search_router,
    stores_router,
    system_router,
    users_router,
    verification_router,
    votes_router,
)

routers = [
    auth_router,
    posts_router,
    comments_router,
    votes_router,
    categories_router,
    stores_router,
    bookmarks_router,
    notifications_router,
    moderation_router,
    admin_router,
    verification_router,
    users_router,
    search_router,
    system_router,
]

__all__ = ["routers"]
