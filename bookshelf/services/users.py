"""Credential store: user lookups, writes and input rules for account fields."""

import logging
import re

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshelf.database import MAX_ID
from bookshelf.errors import Conflict
from bookshelf.models.user import User

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
HANDLE_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
NUMERIC_ID_RE = re.compile(r"[0-9]+")

NAME_MIN_LENGTH, NAME_MAX_LENGTH = 2, 50
HANDLE_MIN_LENGTH, HANDLE_MAX_LENGTH = 3, 20

# Substrings identifying the violated unique column in driver error messages.
UNIQUE_FIELDS = (
    ("profile_slug", "This profile slug is already taken"),
    ("username", "This username is already taken"),
    ("email", "An account with this email already exists"),
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_handle(value: str) -> str:
    return value.strip().lower()


def is_valid_email(email: str) -> bool:
    return EMAIL_RE.match(email.strip()) is not None


def is_valid_name(name: str) -> bool:
    return NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH


def is_valid_handle(value: str) -> bool:
    """Usernames and profile slugs share the same length and charset rules."""
    value = value.strip()
    return (
        HANDLE_MIN_LENGTH <= len(value) <= HANDLE_MAX_LENGTH
        and HANDLE_RE.match(value) is not None
    )


def parse_numeric_id(value: str) -> int | None:
    """Return ``value`` as a user id if it is a plain ASCII number in range."""
    if NUMERIC_ID_RE.fullmatch(value) is None:
        return None
    user_id = int(value)
    return user_id if user_id <= MAX_ID else None


def is_valid_slug(value: str) -> bool:
    """Slugs follow the handle rules and must not look like a raw user id."""
    return is_valid_handle(value) and NUMERIC_ID_RE.fullmatch(value.strip()) is None


def get_user(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email, ignoring case and surrounding whitespace."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username, ignoring case."""
    return db.query(User).filter(User.username == normalize_handle(username)).first()


def get_user_by_slug(db: Session, slug: str) -> User | None:
    """Get a user by profile slug, ignoring case."""
    return db.query(User).filter(User.profile_slug == normalize_handle(slug)).first()


def get_user_by_public_id(db: Session, identifier: str) -> User | None:
    """Resolve a public profile identifier: a raw user id, or else a profile slug.

    Slugs are never all digits, so the two cannot collide.
    """
    user_id = parse_numeric_id(identifier)
    if user_id is not None:
        return get_user(db, user_id)
    return get_user_by_slug(db, identifier)


def is_taken(db: Session, column, value: str, exclude_user_id: int | None = None) -> bool:
    """Check whether another user already holds ``value`` in a unique column."""
    query = db.query(User.id).filter(column == value)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def commit_user(
    db: Session, user: User, conflict_status: int = status.HTTP_409_CONFLICT
) -> User:
    """Persist a new or modified user.

    Application-level uniqueness checks run before this and only give early,
    friendly errors. Two racing requests can both pass them, so a unique
    constraint violation from the database is still reported as ``Conflict``.
    """
    user_id = user.id
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        message = str(e.orig)
        detail = next(
            (text for field, text in UNIQUE_FIELDS if field in message),
            "Account details conflict with an existing account",
        )
        logger.warning(f"Unique constraint violation while saving user {user_id}: {detail}")
        raise Conflict(detail, status_code=conflict_status) from e
    db.refresh(user)
    return user


def create_user(
    db: Session,
    name: str,
    email: str,
    password_hash: str,
    username: str | None = None,
) -> User:
    """Create a new user from already validated input."""
    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=password_hash,
        username=normalize_handle(username) if username else None,
    )
    return commit_user(db, user, conflict_status=status.HTTP_400_BAD_REQUEST)
