"""FastAPI dependencies for authentication and database."""

import logging
from typing import Annotated

from fastapi import Depends, Request, status
from sqlalchemy.orm import Session

from bookshelf.database import get_db
from bookshelf.errors import InvalidToken, NotFound, Unauthorized
from bookshelf.models.user import User
from bookshelf.services.session_cookie import read_session_cookie
from bookshelf.services.tokens import RejectedToken, TokenService, get_token_service

logger = logging.getLogger(__name__)


class SessionAuth:
    """Resolve the user id from the session cookie.

    Every protected handler depends on this; the route guard middleware only
    looks at cookie presence, so this is where the signature and expiry are
    actually checked. A missing cookie answers 401; a cookie that fails
    verification answers ``invalid_token_status``.
    """

    def __init__(self, invalid_token_status: int = status.HTTP_403_FORBIDDEN):
        self.invalid_token_status = invalid_token_status

    def __call__(
        self,
        request: Request,
        tokens: Annotated[TokenService, Depends(get_token_service)],
    ) -> int:
        token = read_session_cookie(request)
        if token is None:
            raise Unauthorized("Unauthorized")

        result = tokens.verify(token)
        if isinstance(result, RejectedToken):
            logger.info(f"Rejected session token on {request.url.path}: {result.reason}")
            raise InvalidToken("Invalid token", status_code=self.invalid_token_status)
        return result.user_id


# Resource endpoints answer 403 for a bad token; account changes answer 401.
require_session = SessionAuth()
require_account_session = SessionAuth(invalid_token_status=status.HTTP_401_UNAUTHORIZED)


def get_optional_user_id(
    request: Request,
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> int | None:
    """User id from a valid session cookie, or None for anonymous callers."""
    token = read_session_cookie(request)
    if token is None:
        return None
    result = tokens.verify(token)
    if isinstance(result, RejectedToken):
        return None
    return result.user_id


def load_user(db: Session, user_id: int) -> User:
    """Load the user a verified token points at."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user


def get_current_user(
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the session cookie."""
    return load_user(db, user_id)


def get_account_user(
    user_id: Annotated[int, Depends(require_account_session)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Current user for account-changing endpoints."""
    return load_user(db, user_id)

