"""Route guard middleware for page navigations.

Runs before any page renders: resolves whether the caller has a session and
applies the RouteTable redirect rules. API routes are left to the
require_session dependency.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from domain.model.errors import DomainError
from domain.model.navigation import RouteTable, SessionState

logger = logging.getLogger(__name__)

NAVIGATION_METHODS = frozenset({"GET", "HEAD"})
API_PREFIX = "/api"


def resolve_session_state(request: Request) -> SessionState:
    """Resolve session presence for a navigation.

    UNKNOWN when no provider is configured or the provider fails; the caller
    must defer rather than guess. A resolved session is kept on request.state
    so handlers downstream do not look it up again.
    """
    provider = getattr(request.app.state, "session_provider", None)
    if provider is None:
        return SessionState.UNKNOWN
    try:
        auth = provider.get_session(request.headers)
    except DomainError as e:
        logger.warning("Session lookup failed during navigation; deferring", extra={
            "path": request.url.path,
            "error": str(e),
        })
        return SessionState.UNKNOWN
    request.state.auth_session = auth
    return SessionState.PRESENT if auth else SessionState.ABSENT


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """Redirect anonymous users away from protected pages and signed-in users
    away from auth-only pages."""

    def __init__(self, app, route_table: RouteTable):
        super().__init__(app)
        self.route_table = route_table

    def _applies_to(self, request: Request) -> bool:
        path = request.url.path
        if request.method not in NAVIGATION_METHODS:
            return False
        if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
            return False
        return self.route_table.is_guarded(path)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._applies_to(request):
            return await call_next(request)

        state = resolve_session_state(request)
        target = self.route_table.resolve_redirect(request.url.path, state)
        if target is None:
            return await call_next(request)

        logger.debug("Navigation redirected", extra={
            "path": request.url.path,
            "target": target,
            "session": state.value,
        })
        return RedirectResponse(target, status_code=302)
