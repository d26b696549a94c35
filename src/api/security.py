"""Auth guard dependencies.

get_session resolves the caller's session (or None); require_session
additionally rejects anonymous callers with 401. Every handler that reads or
mutates user-scoped data depends on require_session.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from api.dependencies import get_session_provider
from domain.model.session import AuthSession
from port.session_provider import SessionProvider

UNAUTHORIZED_MESSAGE = "You must be logged in to access this resource"


def get_session(
    request: Request,
    provider: SessionProvider = Depends(get_session_provider),
) -> Optional[AuthSession]:
    """Get the current session (optional). Returns None for anonymous callers.

    Reuses the session the route guard already resolved for this request.
    """
    if hasattr(request.state, "auth_session"):
        return request.state.auth_session
    return provider.get_session(request.headers)


def require_session(
    auth: Optional[AuthSession] = Depends(get_session),
) -> AuthSession:
    """Get the current session (required). Raises 401 if not authenticated."""
    if auth is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_MESSAGE,
        )
    return auth
