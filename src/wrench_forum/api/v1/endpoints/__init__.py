"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .bookmarks import router as bookmarks_router
from .categories import router as categories_router
from .comments import router as comments_router
from .moderation import router as moderation_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .search import router as search_router
from .stores import router as stores_router
from .system import router as system_router
from .users import router as users_router
from .verification import router as verification_router
from .votes import router as votes_router

__all__ = [
    "admin_router",
    "auth_router",
    "bookmarks_router",
    "categories_router",
    "comments_router",
    "moderation_router",
    "notifications_router",
    "posts_router",
    "search_router",
    "stores_router",
    "system_router",
    "users_router",
    "verification_router",
    "votes_router",
]
