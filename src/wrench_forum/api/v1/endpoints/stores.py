"""Store directory endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from wrench_forum.schemas.store import StoreCreate, StoreResponse
from wrench_forum.schemas.vote import StoreVoteCreate
from wrench_forum.services import stores as store_service

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("/", response_model=list[StoreResponse])
async def list_stores(
    db: SessionDep,
    current_user: OptionalUserDep,
    category: str | None = None,
) -> list[StoreResponse]:
    """List stores alphabetically with their reliability scores."""
    stores = store_service.list_stores(db, category=category)
    return store_service.to_responses(db, stores, viewer=current_user)


@router.get("/categories", response_model=list[str])
async def list_store_categories(db: SessionDep) -> list[str]:
    """Return the store categories offered when submitting a store."""
    return store_service.list_store_categories(db)


@router.post("/", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(
    payload: StoreCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StoreResponse:
    """Submit a new store to the directory."""
    store = store_service.create_store(db, submitter=current_user, data=payload)
    return store_service.to_responses(db, [store], viewer=current_user)[0]


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(store_id: int, db: SessionDep, current_user: OptionalUserDep) -> StoreResponse:
    store = store_service.get_store_or_404(db, store_id)
    return store_service.to_responses(db, [store], viewer=current_user)[0]


@router.post("/{store_id}/vote", response_model=StoreResponse)
async def vote_on_store(
    store_id: int,
    payload: StoreVoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StoreResponse:
    """Rate a store up or down, replacing any earlier rating by the caller.

    Args:
        store_id: ID of the store
        payload: Whether the rating is positive
        current_user: Authenticated user; must be allowed to rate stores
        db: Database session

    Returns:
        The store with its recomputed reliability score
    """
    store_service.apply_store_vote(
        db, store_id=store_id, voter=current_user, positive=payload.positive
    )
    store = store_service.get_store_or_404(db, store_id)
    return store_service.to_responses(db, [store], viewer=current_user)[0]
