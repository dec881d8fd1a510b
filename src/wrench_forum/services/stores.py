"""Vendor directory and reliability scoring.

Store votes are upsert-replace: a member's latest thumbs up or down
overwrites their previous one, and there is no toggle-off. Reliability is
aggregated from the vote rows on every read rather than kept in counters.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.models import Store, StoreVote, User
from wrench_forum.schemas.store import StoreCreate, StoreResponse
from wrench_forum.services.errors import InvalidInputError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

DEFAULT_STORE_CATEGORIES: tuple[str, ...] = (
    "OEM Parts",
    "Aftermarket Parts",
    "Tools",
    "Fluids & Chemicals",
    "Electronics",
    "General",
)


@dataclass(frozen=True)
class VoteTally:
    """Positive and total vote counts for one store."""

    positive_votes: int = 0
    total_votes: int = 0

    @property
    def reliability_score(self) -> float | None:
        """Percentage of positive votes, or None before anyone has voted."""
        if self.total_votes == 0:
            return None
        return self.positive_votes / self.total_votes * 100


def tally_votes(db: Session, store_ids: Sequence[int]) -> dict[int, VoteTally]:
    """Aggregate positive and total votes for each store id."""
    if not store_ids:
        return {}
    rows = db.execute(
        select(
            StoreVote.store_id,
            func.sum(case((StoreVote.positive.is_(True), 1), else_=0)),
            func.count(StoreVote.id),
        )
        .where(StoreVote.store_id.in_(store_ids))
        .group_by(StoreVote.store_id)
    )
    return {
        store_id: VoteTally(positive_votes=int(positive or 0), total_votes=total)
        for store_id, positive, total in rows
    }


def _user_votes(db: Session, user_id: int, store_ids: Sequence[int]) -> dict[int, bool]:
    if not store_ids:
        return {}
    rows = db.execute(
        select(StoreVote.store_id, StoreVote.positive).where(
            StoreVote.user_id == user_id, StoreVote.store_id.in_(store_ids)
        )
    )
    return {store_id: positive for store_id, positive in rows}


def to_responses(
    db: Session, stores: Sequence[Store], viewer: User | None = None
) -> list[StoreResponse]:
    """Attach tallies and the viewer's vote to each store."""
    ids = [store.id for store in stores]
    tallies = tally_votes(db, ids)
    mine = _user_votes(db, viewer.id, ids) if viewer is not None else {}
    responses = []
    for store in stores:
        tally = tallies.get(store.id, VoteTally())
        responses.append(
            StoreResponse(
                id=store.id,
                name=store.name,
                url=store.url,
                description=store.description,
                category=store.category,
                submitted_by=store.submitted_by,
                created_at=store.created_at,
                positive_votes=tally.positive_votes,
                total_votes=tally.total_votes,
                reliability_score=tally.reliability_score,
                user_vote=mine.get(store.id),
            )
        )
    return responses


def get_store_or_404(db: Session, store_id: int) -> Store:
    store = db.get(Store, store_id)
    if store is None:
        raise NotFoundError("Store not found")
    return store


def list_stores(db: Session, category: str | None = None) -> Sequence[Store]:
    """Return stores ordered by name, optionally within one category."""
    stmt = select(Store)
    if category:
        stmt = stmt.where(Store.category == category)
    return db.scalars(stmt.order_by(Store.name, Store.id)).all()


def list_store_categories(db: Session) -> list[str]:
    """Return the default categories followed by any others in use."""
    used = db.scalars(select(Store.category).distinct().order_by(Store.category)).all()
    return list(DEFAULT_STORE_CATEGORIES) + [c for c in used if c not in DEFAULT_STORE_CATEGORIES]


def create_store(db: Session, *, submitter: User, data: StoreCreate) -> Store:
    """Add a store to the directory.

    Raises:
        InvalidInputError: If the name is blank or the URL is not http(s)
    """
    name = data.name.strip()
    url = data.url.strip()
    if not name:
        raise InvalidInputError("Store name cannot be empty")
    if not url.startswith(("http://", "https://")):
        raise InvalidInputError("Store URL must start with http:// or https://")
    description = data.description.strip() if data.description else None

    with unit_of_work(db):
        store = Store(
            name=name,
            url=url,
            description=description or None,
            category=data.category.strip() or "General",
            submitted_by=submitter.id,
        )
        db.add(store)
    logger.info("User %s submitted store %s", submitter.id, store.id)
    return store


def search_stores(db: Session, query: str, limit: int = 20) -> Sequence[Store]:
    pattern = f"%{query}%"
    return db.scalars(
        select(Store)
        .where(
            or_(
                Store.name.ilike(pattern),
                Store.description.ilike(pattern),
                Store.category.ilike(pattern),
            )
        )
        .order_by(Store.name, Store.id)
        .limit(limit)
    ).all()


def apply_store_vote(db: Session, *, store_id: int, voter: User, positive: bool) -> VoteTally:
    """Record or overwrite the voter's opinion of a store and return the new tally.

    Raises:
        PermissionDeniedError: If the voter cannot vote on stores
        NotFoundError: If the store does not exist
    """
    if not voter.can_vote_stores:
        raise PermissionDeniedError("Only verified mechanics can rate stores")

    with unit_of_work(db):
        get_store_or_404(db, store_id)
        existing = db.scalars(
            select(StoreVote).where(StoreVote.store_id == store_id, StoreVote.user_id == voter.id)
        ).first()
        if existing is None:
            db.add(StoreVote(store_id=store_id, user_id=voter.id, positive=positive))
        else:
            existing.positive = positive

    tally = tally_votes(db, [store_id]).get(store_id, VoteTally())
    logger.info(
        "Store %s voted %s by user %s: %s/%s",
        store_id,
        "up" if positive else "down",
        voter.id,
        tally.positive_votes,
        tally.total_votes,
    )
    return tally
