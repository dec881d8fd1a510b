"""Mechanic verification endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from wrench_forum.schemas.moderation import VerificationCreate, VerificationResponse
from wrench_forum.services import verification as verification_service
from wrench_forum.services.errors import NotFoundError

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/verification", tags=["verification"])


@router.post("/", response_model=VerificationResponse, status_code=status.HTTP_201_CREATED)
async def submit_verification(
    payload: VerificationCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VerificationResponse:
    """Ask an admin to verify the caller as a mechanic."""
    request = verification_service.submit_request(
        db, user=current_user, proof_text=payload.proof_text
    )
    return VerificationResponse.model_validate(request)


@router.get("/me", response_model=VerificationResponse)
async def my_verification(current_user: CurrentUserDep, db: SessionDep) -> VerificationResponse:
    """Return the caller's most recent verification request."""
    request = verification_service.latest_for_user(db, current_user.id)
    if request is None:
        raise NotFoundError("No verification request found")
    return VerificationResponse.model_validate(request)
