"""Mechanic verification requests."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.db.time import utcnow
from wrench_forum.models import NotificationKind, User, UserRole, VerificationRequest
from wrench_forum.models.moderation import (
    VERIFICATION_APPROVED,
    VERIFICATION_DENIED,
    VERIFICATION_PENDING,
)
from wrench_forum.services.activity import log_activity
from wrench_forum.services.errors import ConflictError, InvalidInputError, NotFoundError
from wrench_forum.services.notifications import notify

logger = logging.getLogger(__name__)


def submit_request(db: Session, *, user: User, proof_text: str) -> VerificationRequest:
    """Ask to be verified as a mechanic.

    Raises:
        InvalidInputError: If the user can already post or the proof is blank
        ConflictError: If the user already has a pending request
    """
    if user.can_post:
        raise InvalidInputError("You are already verified")
    proof_text = proof_text.strip()
    if not proof_text:
        raise InvalidInputError("Proof of experience is required")

    with unit_of_work(db):
        pending = db.scalars(
            select(VerificationRequest).where(
                VerificationRequest.user_id == user.id,
                VerificationRequest.status == VERIFICATION_PENDING,
            )
        ).first()
        if pending is not None:
            raise ConflictError("You already have a pending verification request")
        request = VerificationRequest(user_id=user.id, proof_text=proof_text)
        db.add(request)
    logger.info("User %s requested verification", user.id)
    return request


def list_pending(db: Session) -> Sequence[VerificationRequest]:
    return db.scalars(
        select(VerificationRequest)
        .where(VerificationRequest.status == VERIFICATION_PENDING)
        .order_by(VerificationRequest.created_at.asc(), VerificationRequest.id.asc())
    ).all()


def latest_for_user(db: Session, user_id: int) -> VerificationRequest | None:
    return db.scalars(
        select(VerificationRequest)
        .where(VerificationRequest.user_id == user_id)
        .order_by(VerificationRequest.created_at.desc(), VerificationRequest.id.desc())
    ).first()


def _get_pending_or_404(db: Session, request_id: int) -> VerificationRequest:
    request = db.get(VerificationRequest, request_id)
    if request is None or request.status != VERIFICATION_PENDING:
        raise NotFoundError("Verification request not found")
    return request


def approve_request(
    db: Session,
    *,
    admin: User,
    request_id: int,
    note: str | None = None,
    ip_address: str | None = None,
) -> VerificationRequest:
    """Promote the requesting user to verified mechanic and notify them."""
    with unit_of_work(db):
        request = _get_pending_or_404(db, request_id)
        request.status = VERIFICATION_APPROVED
        request.reviewed_by = admin.id
        request.review_note = note
        request.reviewed_at = utcnow()
        user = db.get(User, request.user_id)
        # Moderators and admins keep their higher role.
        if user is not None and not user.can_post:
            user.role = UserRole.VERIFIED_MECHANIC.value
        notify(
            db,
            recipient_id=request.user_id,
            kind=NotificationKind.VERIFICATION_APPROVED,
            content="Your mechanic verification was approved. You can now post.",
            actor_id=admin.id,
        )
        log_activity(db, user_id=admin.id, action="approve_verification", target_type="user",
                     target_id=request.user_id, ip_address=ip_address)
    return request


def deny_request(
    db: Session,
    *,
    admin: User,
    request_id: int,
    note: str | None = None,
    ip_address: str | None = None,
) -> VerificationRequest:
    with unit_of_work(db):
        request = _get_pending_or_404(db, request_id)
        request.status = VERIFICATION_DENIED
        request.reviewed_by = admin.id
        request.review_note = note
        request.reviewed_at = utcnow()
        content = "Your mechanic verification was denied."
        if note:
            content = f"{content} Note: {note}"
        notify(
            db,
            recipient_id=request.user_id,
            kind=NotificationKind.VERIFICATION_DENIED,
            content=content,
            actor_id=admin.id,
        )
        log_activity(db, user_id=admin.id, action="deny_verification", target_type="user",
                     target_id=request.user_id, details=note, ip_address=ip_address)
    return request
