"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from wrench_forum.core.settings import settings
from wrench_forum.db.session import get_db
from wrench_forum.models import User
from wrench_forum.services import user_service

# Bearer tokens are optional; the session cookie is accepted as well.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_session_token(request: Request, credentials: BearerDep) -> str | None:
    """Return the session token from the Authorization header or cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


SessionTokenDep = Annotated[str | None, Depends(get_session_token)]


def get_optional_user(token: SessionTokenDep, db: SessionDep) -> User | None:
    """Return the signed-in user, or None for anonymous requests."""
    if not token:
        return None
    return user_service.resolve_session(db, token)


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_current_user(user: OptionalUserDep) -> User:
    """Get the current authenticated user.

    Args:
        user: User resolved from the session token, if any

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If no valid, unexpired session belongs to an active user
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_moderator(user: CurrentUserDep) -> User:
    if not user.can_moderate:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Moderator access required")
    return user


def require_admin(user: CurrentUserDep) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


ModeratorDep = Annotated[User, Depends(require_moderator)]
AdminDep = Annotated[User, Depends(require_admin)]


def get_client_ip(request: Request) -> str | None:
    """Return the caller's address for the activity log."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


ClientIpDep = Annotated[str | None, Depends(get_client_ip)]
