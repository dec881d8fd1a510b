"""Authentication endpoints: registration, login and logout."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from wrench_forum.core.settings import settings
from wrench_forum.db.time import as_utc
from wrench_forum.models import AuthSession, User
from wrench_forum.schemas.user import LoginRequest, SessionResponse, UserCreate, UserResponse
from wrench_forum.services import user_service

from ..dependencies import ClientIpDep, CurrentUserDep, SessionDep, SessionTokenDep

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(response: Response, session: AuthSession, user: User) -> SessionResponse:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
    )
    return SessionResponse(
        token=session.token,
        expires_at=as_utc(session.expires_at),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    response: Response,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> SessionResponse:
    """Create an unverified account and sign it in.

    Args:
        payload: Username, email and password
        response: Outgoing response used to set the session cookie
        db: Database session
        client_ip: Caller address for the activity log

    Returns:
        The new session token and account details
    """
    user = user_service.register_user(db, payload)
    session = user_service.create_session(db, user, ip_address=client_ip)
    return _session_response(response, session, user)


@router.post("/login", response_model=SessionResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    db: SessionDep,
    client_ip: ClientIpDep,
) -> SessionResponse:
    """Exchange an email address or username and a password for a session token."""
    user = user_service.authenticate(db, payload.login, payload.password)
    session = user_service.create_session(db, user, ip_address=client_ip)
    return _session_response(response, session, user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: SessionTokenDep,
    db: SessionDep,
) -> Response:
    """End the current session. Logging out twice is harmless."""
    if token:
        user_service.delete_session(db, token)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUserDep) -> UserResponse:
    """Return the signed-in user's account."""
    return UserResponse.model_validate(current_user)
