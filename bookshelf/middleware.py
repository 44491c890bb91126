"""Route guard for the page area.

The guard only checks whether a session cookie is present. It exists to send
people to the right page, not to protect data: every API handler verifies the
token itself before trusting the user id.
"""

from collections.abc import Iterable
from enum import Enum

from fastapi import Request
from fastapi.responses import RedirectResponse

from bookshelf.config import Settings
from bookshelf.services.session_cookie import read_session_cookie


class RouteDecision(str, Enum):
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    REDIRECT_TO_LANDING = "redirect_to_landing"


def is_protected_path(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


def decide(
    path: str,
    has_session: bool,
    protected_prefixes: Iterable[str],
    auth_pages: Iterable[str],
) -> RouteDecision:
    """Decide what to do with a page request given cookie presence."""
    if is_protected_path(path, protected_prefixes) and not has_session:
        return RouteDecision.REDIRECT_TO_LOGIN
    if path in auth_pages and has_session:
        return RouteDecision.REDIRECT_TO_LANDING
    return RouteDecision.ALLOW


class RouteGuardMiddleware:
    """Pure ASGI middleware applying ``decide`` to every HTTP request."""

    def __init__(self, app, settings: Settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        decision = decide(
            request.url.path,
            read_session_cookie(request) is not None,
            self.settings.protected_path_prefixes,
            self.settings.auth_page_paths,
        )

        if decision is RouteDecision.REDIRECT_TO_LOGIN:
            response = RedirectResponse(self.settings.login_path)
        elif decision is RouteDecision.REDIRECT_TO_LANDING:
            response = RedirectResponse(self.settings.landing_path)
        else:
            await self.app(scope, receive, send)
            return

        await response(scope, receive, send)
