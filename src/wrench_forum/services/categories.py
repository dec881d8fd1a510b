"""Category and tag lookups plus default seeding."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from wrench_forum.db.session import unit_of_work
from wrench_forum.models import Category, Tag

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: tuple[tuple[str, str, str], ...] = (
    ("Engine", "engine", "Engine diagnostics, rebuilds, timing and performance"),
    ("Transmission", "transmission", "Manual and automatic transmissions, clutches and drivelines"),
    ("Brakes", "brakes", "Pads, rotors, calipers, ABS and hydraulic systems"),
    ("Electrical", "electrical", "Wiring, charging systems, sensors and modules"),
    ("Suspension", "suspension", "Shocks, struts, steering and alignment"),
)

DEFAULT_TAGS: tuple[str, ...] = ("diagnostics", "diy", "obd2", "how-to", "recall")

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lower-case ``value`` and collapse non-alphanumerics into single hyphens."""
    return _SLUG_INVALID.sub("-", value.strip().lower()).strip("-")


def ensure_default_categories(db: Session) -> int:
    """Insert any missing default categories and tags; return how many rows were added."""
    added = 0
    with unit_of_work(db):
        existing = set(db.scalars(select(Category.slug)))
        for name, slug, description in DEFAULT_CATEGORIES:
            if slug not in existing:
                db.add(Category(name=name, slug=slug, description=description))
                added += 1
        existing_tags = set(db.scalars(select(Tag.slug)))
        for tag in DEFAULT_TAGS:
            if tag not in existing_tags:
                db.add(Tag(name=tag, slug=tag))
                added += 1
    if added:
        logger.info("Seeded %s default categories/tags", added)
    return added


def list_categories(db: Session) -> Sequence[Category]:
    return db.scalars(select(Category).order_by(Category.name)).all()


def get_category_by_slug(db: Session, slug: str) -> Category | None:
    return db.scalars(select(Category).where(Category.slug == slug)).first()


def list_tags(db: Session) -> Sequence[Tag]:
    return db.scalars(select(Tag).order_by(Tag.name)).all()


def resolve_tags(db: Session, names: Sequence[str]) -> list[Tag]:
    """Return Tag rows for ``names``, creating missing ones in the caller's transaction."""
    tags: list[Tag] = []
    seen: set[str] = set()
    for name in names:
        slug = slugify(name)
        if not slug or slug in seen:
            continue
        seen.add(slug)
        tag = db.scalars(select(Tag).where(Tag.slug == slug)).first()
        if tag is None:
            tag = Tag(name=name.strip()[:50], slug=slug[:50])
            db.add(tag)
        tags.append(tag)
    return tags
