"""Account, session and profile helpers for managing users."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from wrench_forum.core import security
from wrench_forum.core.settings import settings
from wrench_forum.db.session import unit_of_work
from wrench_forum.db.time import as_utc, utcnow
from wrench_forum.models import AuthSession, Comment, Post, User, UserProfile, UserRole
from wrench_forum.schemas.user import ProfileUpdate, UserCreate
from wrench_forum.services.activity import log_activity
from wrench_forum.services.errors import (
    AuthenticationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

__all__ = [
    "UserStats",
    "authenticate",
    "change_role",
    "create_session",
    "delete_session",
    "delete_user_sessions",
    "get_user",
    "get_user_by_email",
    "get_user_by_username",
    "list_users",
    "register_user",
    "resolve_session",
    "set_flair",
    "update_profile",
    "user_stats",
]


@dataclass(frozen=True)
class UserStats:
    post_count: int
    comment_count: int
    karma: int
    member_since: datetime


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalars(select(User).where(User.username == username)).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == security.normalize_email(email))).first()


def list_users(db: Session, skip: int = 0, limit: int = 100) -> Sequence[User]:
    """Return users with simple offset-based pagination."""
    return db.scalars(select(User).order_by(User.id).offset(skip).limit(limit)).all()


def register_user(db: Session, data: UserCreate) -> User:
    """Validate and persist a new unverified user with an empty profile.

    Raises:
        InvalidInputError: If the username, email or password is malformed
        ConflictError: If the username or email is already taken
    """
    username = data.username.strip()
    email = security.normalize_email(data.email)
    if not security.is_valid_username(username):
        raise InvalidInputError(
            "Username must be 3-20 characters of letters, numbers or underscores"
        )
    if not security.is_valid_email(email):
        raise InvalidInputError("Invalid email address")
    if not security.is_valid_password(data.password):
        raise InvalidInputError(
            f"Password must be at least {settings.password_min_length} characters "
            f"and at most {security.PASSWORD_MAX_BYTES} bytes"
        )

    with unit_of_work(db):
        taken = db.scalars(
            select(User).where(or_(User.username == username, User.email == email))
        ).first()
        if taken is not None:
            raise ConflictError("Username or email already registered")

        user = User(
            username=username,
            email=email,
            password_hash=security.hash_password(data.password),
            role=UserRole.UNVERIFIED.value,
        )
        user.profile = UserProfile()
        db.add(user)
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate(db: Session, login: str, password: str) -> User:
    """Return the user matching the credentials.

    Args:
        db: Database session
        login: Email address or username; usernames never contain ``@``
        password: Plaintext password

    Raises:
        AuthenticationError: If the credentials are wrong or the user is banned
    """
    login = login.strip()
    if "@" in login:
        user = get_user_by_email(db, login)
    else:
        user = get_user_by_username(db, login)
    if user is None or not security.verify_password(password, user.password_hash):
        logger.info("Failed login for %r", login)
        raise AuthenticationError("Invalid email, username or password")
    if user.is_banned:
        raise AuthenticationError("This account has been banned")
    return user


def create_session(db: Session, user: User, ip_address: str | None = None) -> AuthSession:
    """Start a login session for ``user``."""
    with unit_of_work(db):
        session = AuthSession(
            token=security.generate_session_token(),
            user_id=user.id,
            expires_at=security.session_expiry(),
        )
        db.add(session)
        log_activity(db, user_id=user.id, action="login", ip_address=ip_address)
    return session


def resolve_session(db: Session, token: str) -> User | None:
    """Return the live user for a session token.

    Expired sessions are deleted on sight. Banned users never resolve.
    """
    session = db.get(AuthSession, token)
    if session is None:
        return None
    if as_utc(session.expires_at) <= utcnow():
        with unit_of_work(db):
            db.delete(session)
        return None
    user = session.user
    if user is None or user.is_banned:
        return None
    return user


def delete_session(db: Session, token: str) -> None:
    with unit_of_work(db):
        session = db.get(AuthSession, token)
        if session is not None:
            db.delete(session)


def delete_user_sessions(db: Session, user_id: int) -> None:
    """Remove every session of a user inside the caller's transaction."""
    db.execute(delete(AuthSession).where(AuthSession.user_id == user_id))


def update_profile(db: Session, user: User, update_data: ProfileUpdate) -> UserProfile:
    """Apply partial updates to the user's profile.

    Raises:
        InvalidInputError: If the website is not an http(s) URL
    """
    update_dict = update_data.model_dump(exclude_unset=True)
    website = update_dict.get("website")
    if website and not website.startswith(("http://", "https://")):
        raise InvalidInputError("Website must start with http:// or https://")

    with unit_of_work(db):
        profile = user.profile
        if profile is None:
            profile = UserProfile(user_id=user.id)
            db.add(profile)
        for key, value in update_dict.items():
            setattr(profile, key, value or None)
    db.refresh(profile)
    return profile


def user_stats(db: Session, user: User) -> UserStats:
    """Summarize a member's activity for their public profile."""
    post_count = db.scalar(
        select(func.count()).select_from(Post).where(
            Post.user_id == user.id, Post.is_removed.is_(False)
        )
    ) or 0
    comment_count = db.scalar(
        select(func.count()).select_from(Comment).where(
            Comment.user_id == user.id, Comment.is_removed.is_(False)
        )
    ) or 0
    return UserStats(
        post_count=post_count,
        comment_count=comment_count,
        karma=user.karma,
        member_since=user.created_at,
    )


def change_role(
    db: Session,
    *,
    admin: User,
    user_id: int,
    role: UserRole,
    ip_address: str | None = None,
) -> User:
    """Give another user a new role.

    Raises:
        NotFoundError: If the user does not exist
        InvalidInputError: If the admin tries to change their own role
    """
    if user_id == admin.id:
        raise InvalidInputError("You cannot change your own role")
    with unit_of_work(db):
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        previous = user.role
        user.role = role.value
        log_activity(
            db,
            user_id=admin.id,
            action="change_role",
            target_type="user",
            target_id=user.id,
            details=f"{previous} -> {role.value}",
            ip_address=ip_address,
        )
    return user


def set_flair(
    db: Session,
    *,
    admin: User,
    user_id: int,
    flair: str | None,
    ip_address: str | None = None,
) -> User:
    with unit_of_work(db):
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.flair = flair.strip() if flair and flair.strip() else None
        log_activity(
            db,
            user_id=admin.id,
            action="set_flair",
            target_type="user",
            target_id=user.id,
            details=user.flair,
            ip_address=ip_address,
        )
    return user
