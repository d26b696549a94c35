from fastapi import HTTPException, Request

from adapter.sql.connection import Database
from adapter.sql.user_repository import SqlUserRepository
from port.session_provider import SessionProvider
from port.user_repository import UserRepository


def _get_database(request: Request) -> Database:
    """Get the application database, raising 503 if unavailable."""
    db = getattr(request.app.state, "database", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


def get_user_repo(request: Request) -> UserRepository:
    return SqlUserRepository(_get_database(request))


def get_session_provider(request: Request) -> SessionProvider:
    """Get the session provider, raising 503 if unavailable."""
    provider = getattr(request.app.state, "session_provider", None)
    if provider is None:
        raise HTTPException(status_code=503, detail="Authentication service unavailable")
    return provider
