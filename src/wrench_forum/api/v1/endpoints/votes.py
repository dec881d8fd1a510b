# src/wrench_forum/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Wrench Forum API."""

from fastapi import APIRouter

from wrench_forum.models import VoteTarget
from wrench_forum.schemas.vote import VoteCreate, VoteResponse
from wrench_forum.services.post_service import get_post_or_404
from wrench_forum.services.voting import apply_vote, get_user_vote

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/posts/{post_id}", response_model=VoteResponse)
async def vote_on_post(
    post_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, flip or withdraw a vote on a post.

    Voting the same direction twice withdraws the vote.

    Returns:
        The post's stored score after the change and the caller's vote
    """
    result = apply_vote(
        db,
        voter_id=current_user.id,
        target_id=post_id,
        kind=VoteTarget.POST,
        requested_value=vote_data.value,
    )
    return VoteResponse(score=result.score, user_vote=result.user_vote)


@router.post("/comments/{comment_id}", response_model=VoteResponse)
async def vote_on_comment(
    comment_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, flip or withdraw a vote on a comment."""
    result = apply_vote(
        db,
        voter_id=current_user.id,
        target_id=comment_id,
        kind=VoteTarget.COMMENT,
        requested_value=vote_data.value,
    )
    return VoteResponse(score=result.score, user_vote=result.user_vote)


@router.get("/posts/{post_id}/my-vote")
async def get_my_vote(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, int]:
    """Return the caller's vote on a post: -1, 0 or 1."""
    get_post_or_404(db, post_id)
    value = get_user_vote(db, user_id=current_user.id, kind=VoteTarget.POST, target_id=post_id)
    return {"user_vote": value}
