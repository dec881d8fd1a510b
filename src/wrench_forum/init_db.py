"""Create tables and seed default categories."""

import argparse
import logging

from wrench_forum.db.session import SessionLocal, create_tables, drop_tables
from wrench_forum.services.categories import ensure_default_categories

logger = logging.getLogger(__name__)


def init_db(reset: bool = False) -> None:
    """Initialize the database by creating all tables and default rows.

    Args:
        reset: Drop every table first. Destroys all forum data.
    """
    if reset:
        logger.warning("Dropping all tables")
        drop_tables()
    create_tables()
    with SessionLocal() as db:
        ensure_default_categories(db)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the forum schema and seed categories.")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    init_db(reset=args.reset)
    logger.info("Database initialized.")


if __name__ == "__main__":
    main()
