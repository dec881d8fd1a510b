"""Create a user or promote an existing one to admin.

Usage:
    python -m wrench_forum.scripts.create_admin USERNAME EMAIL PASSWORD
"""
from __future__ import annotations

import argparse
import logging

from wrench_forum.db.session import SessionLocal, unit_of_work
from wrench_forum.init_db import init_db
from wrench_forum.models import UserRole
from wrench_forum.schemas.user import UserCreate
from wrench_forum.services import user_service

logger = logging.getLogger(__name__)


def create_admin(username: str, email: str, password: str) -> int:
    """Return the id of the admin account, creating it when missing."""
    init_db()
    with SessionLocal() as db:
        user = user_service.get_user_by_username(db, username)
        if user is None:
            user = user_service.register_user(
                db, UserCreate(username=username, email=email, password=password)
            )
        with unit_of_work(db):
            user.role = UserRole.ADMIN.value
        return user.id


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    user_id = create_admin(args.username, args.email, args.password)
    logger.info("User %s (%s) is now an admin", args.username, user_id)


if __name__ == "__main__":
    main()
