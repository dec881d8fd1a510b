# src/wrench_forum/models/__init__.py
"""SQLAlchemy models for the Wrench Forum application."""

from .announcement import Announcement
from .bookmark import Bookmark
from .category import Category, Tag, post_tags
from .comment import Comment
from .moderation import ActivityLog, Report, VerificationRequest
from .notification import Notification, NotificationKind
from .post import Post
from .store import Store, StoreVote
from .user import AuthSession, User, UserProfile, UserRole
from .vote import Vote, VoteTarget

__all__ = [
    "Announcement",
    "Bookmark",
    "Category", "Tag", "post_tags",
    "Comment",
    "ActivityLog", "Report", "VerificationRequest",
    "Notification", "NotificationKind",
    "Post",
    "Store", "StoreVote",
    "AuthSession", "User", "UserProfile", "UserRole",
    "Vote", "VoteTarget",
]
