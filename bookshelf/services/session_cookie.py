"""Session cookie transport.

The session token travels only in an HttpOnly, SameSite=Lax cookie. It has no
Max-Age: the browser keeps it for the session and the token's own expiry bounds
its usefulness. Logout overwrites it with an empty, already-expired value.
"""

from datetime import UTC, datetime

from fastapi import Request, Response

from bookshelf.config import get_settings

EXPIRED = datetime.fromtimestamp(0, UTC)


def _cookie_options(secure: bool) -> dict:
    return {
        "httponly": True,
        "secure": secure,
        "samesite": "lax",
        "path": "/",
    }


def set_session_cookie(response: Response, token: str, secure: bool | None = None) -> None:
    """Attach the session token to a response."""
    settings = get_settings()
    if secure is None:
        secure = settings.is_production
    response.set_cookie(settings.session_cookie_name, token, **_cookie_options(secure))


def clear_session_cookie(response: Response, secure: bool | None = None) -> None:
    """Overwrite the session cookie with an empty value that has already expired."""
    settings = get_settings()
    if secure is None:
        secure = settings.is_production
    response.set_cookie(
        settings.session_cookie_name, "", expires=EXPIRED, **_cookie_options(secure)
    )


def read_session_cookie(request: Request) -> str | None:
    """Return the raw session token sent by the client, if any."""
    return request.cookies.get(get_settings().session_cookie_name) or None
