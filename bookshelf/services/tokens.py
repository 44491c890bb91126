"""Signed, time-limited session tokens.

Tokens are HS256 JWTs carrying ``sub`` (the user id), ``iat`` and ``exp``. The
server keeps no session table: a token is valid exactly when its signature
checks out against the configured secret and its expiry has not passed. There
is no revocation list, so a leaked token stays usable until it expires.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt

from bookshelf.config import get_settings
from bookshelf.services.users import parse_numeric_id

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ValidToken:
    """Token verified; ``user_id`` is trustworthy."""

    user_id: int


@dataclass(frozen=True)
class RejectedToken:
    """Token rejected; callers must treat the request as unauthenticated."""

    reason: str


TokenCheck = ValidToken | RejectedToken


class TokenService:
    """Issues and verifies session tokens with a server-held secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(days=7),
        clock: Clock = utc_now,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime
        self._clock = clock

    def issue(self, user_id: int) -> str:
        """Create a token for ``user_id`` expiring after the configured lifetime."""
        issued_at = self._clock()
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenCheck:
        """Check signature, shape and expiry of a token."""
        if not token:
            return RejectedToken("malformed")

        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            return RejectedToken("malformed")

        try:
            # Expiry is checked below against our own clock.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return RejectedToken("bad_signature")

        expires_at = claims.get("exp")
        if not isinstance(expires_at, int | float):
            return RejectedToken("malformed")
        if self._clock().timestamp() >= expires_at:
            return RejectedToken("expired")

        user_id = parse_numeric_id(str(claims.get("sub", "")))
        if user_id is None:
            return RejectedToken("missing_subject")

        return ValidToken(user_id=user_id)


@lru_cache
def get_token_service() -> TokenService:
    """Build the process-wide token service from settings."""
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        lifetime=timedelta(minutes=settings.jwt_expiration_minutes),
    )
