"""
organizations/services.py — account lookup, creation and bootstrap seeding.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth import dummy_verify, hash_password, verify_password
from core.base import UserRole
from modules.organizations.models import User

log = logging.getLogger("zap.api")


class DuplicateUsername(Exception):
    pass


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, else None.

    Unknown usernames and wrong passwords are indistinguishable to the caller,
    including in bcrypt work done.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_user(db: Session, username: str, password: str, role: str) -> User:
    user = User(username=username, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateUsername(username)
    db.refresh(user)
    return user


def seed_default_admin(db: Session, username: str, password: str) -> bool:
    """Create the bootstrap administrator if no user with that name exists."""
    if db.query(User).filter(User.username == username).first():
        return False
    create_user(db, username, password, UserRole.ADMINISTRATOR.value)
    log.warning(f"Seeded default administrator {username!r} from settings")
    return True
