"""Password hashing and password strength policy."""

import re
from functools import lru_cache

from passlib.context import CryptContext

from bookshelf.config import get_settings

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
MIN_PASSWORD_LENGTH = 8

# (pattern, message) pairs; every pattern must match somewhere in the password.
CHARACTER_CLASS_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"\d"), "Password must contain at least one number"),
    (
        re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]"),
        "Password must contain at least one special character",
    ),
)


def password_problems(password: str) -> list[str]:
    """Return the strength rules the password fails, empty when it is strong enough."""
    problems = []
    if len(password) < MIN_PASSWORD_LENGTH:
        problems.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    problems.extend(
        message for pattern, message in CHARACTER_CLASS_RULES if not pattern.search(password)
    )
    return problems


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Verify a password against its hash.

        Comparison is done by passlib, which compares digests in constant time.
        A missing or unparseable hash never matches, but still costs one
        bcrypt round so unknown accounts answer as slowly as known ones.
        """
        if not password_hash:
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the process-wide password hasher."""
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)
