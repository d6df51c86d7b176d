"""Create the schema and the initial admin user.

Usage:
    python -m backend.scripts.seed

The admin password is read from ``SEED_ADMIN_PASSWORD`` (default ``123456``).
Running the script twice leaves the existing user untouched.
"""

from __future__ import annotations

import logging
import os

import backend.app.models  # noqa: F401  (registers every table on Base.metadata)
from backend.app.core.database import Base, SessionLocal, engine
from backend.app.core.security import get_password_hash
from backend.app.models.user import User

logger = logging.getLogger(__name__)

ADMIN_NAME = "Admin"
ADMIN_EMAIL = "admin@test.com"
DEFAULT_ADMIN_PASSWORD = "123456"


def seed() -> None:
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        admin = db.query(User).filter_by(email=ADMIN_EMAIL).first()
        if admin:
            logger.info("Admin user %s already exists, skipping", ADMIN_EMAIL)
            return

        password = os.environ.get("SEED_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)
        db.add(
            User(
                name=ADMIN_NAME,
                email=ADMIN_EMAIL,
                password_hash=get_password_hash(password),
            )
        )
        db.commit()
        logger.info("Created admin user %s", ADMIN_EMAIL)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    seed()
