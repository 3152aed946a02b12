# app/bootstrap.py
"""
Create the first super admin.

    python -m app.bootstrap admin@example.com 'a-long-password' --name Owner
"""
import argparse
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.db import session as db_session
from app.models.user import User
from app.repositories import UserRepository
from app.utils.security import hash_password

log = logging.getLogger(__name__)


def create_super_admin(db: Session, email: str, password: str, name: Optional[str] = None) -> User:
    repo = UserRepository(db)
    existing = repo.get_by_email(email)
    if existing is not None:
        log.info("user %s already exists (id=%s)", existing.email, existing.id)
        return existing
    return repo.create(
        {
            "email": email.strip().lower(),
            "name": name,
            "password_hash": hash_password(password),
            "provider": "local",
            "role": "super_admin",
            "is_active": True,
        }
    )


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Create the first super admin account.")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    db = db_session.SessionLocal()
    try:
        user = create_super_admin(db, args.email, args.password, args.name)
        log.info("super admin ready: %s (id=%s)", user.email, user.id)
    finally:
        db.close()


if __name__ == "__main__":
    main()
