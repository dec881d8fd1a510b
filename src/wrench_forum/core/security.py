"""Password hashing, session tokens and input validation helpers."""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timedelta

import bcrypt

from wrench_forum.core.settings import settings
from wrench_forum.db.time import utcnow

EMAIL_MAX_LENGTH = 254
# bcrypt only reads the first 72 bytes and newer releases reject anything longer.
PASSWORD_MAX_BYTES = 72
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,20}$")


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Return True when ``password`` matches the stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash in storage, or a password bcrypt refuses to hash.
        return False


def generate_session_token() -> str:
    """Mint an opaque session token."""
    return str(uuid.uuid4())


def session_expiry(now: datetime | None = None) -> datetime:
    """Return the expiry timestamp for a session created at ``now``."""
    return (now or utcnow()) + timedelta(days=settings.session_ttl_days)


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address for storage."""
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """Check the basic shape of an email address.

    The address must have exactly one ``@`` with non-empty local and domain
    parts, and the domain must contain a dot.
    """
    email = email.strip()
    if not email or len(email) > EMAIL_MAX_LENGTH:
        return False
    if email.count("@") != 1:
        return False
    local, domain = email.split("@")
    return bool(local) and bool(domain) and "." in domain


def is_valid_username(username: str) -> bool:
    """Usernames are 3-20 characters of letters, digits or underscores."""
    return USERNAME_PATTERN.fullmatch(username) is not None


def is_valid_password(password: str) -> bool:
    """Passwords need at least the configured length and at most 72 UTF-8 bytes."""
    return (
        len(password) >= settings.password_min_length
        and len(password.encode()) <= PASSWORD_MAX_BYTES
    )
