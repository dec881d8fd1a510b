"""Comment editing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from wrench_forum.schemas.comment import CommentResponse, CommentUpdate
from wrench_forum.schemas.user import UserSummary
from wrench_forum.services import comment_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Edit a comment. Allowed for the author and moderators."""
    comment = comment_service.update_comment(
        db, comment_id=comment_id, user=current_user, body=payload.body
    )
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        parent_id=comment.parent_id,
        body=comment.body,
        score=comment.score,
        author=UserSummary.model_validate(comment.author),
        created_at=comment.created_at,
        edited_at=comment.edited_at,
    )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Remove a comment. Allowed for the author and moderators."""
    comment_service.delete_comment(db, comment_id=comment_id, user=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
