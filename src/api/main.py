"""FastAPI application entry point."""

import os
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapter.auth.session_provider import DatabaseSessionProvider
from adapter.sql.account_repository import SqlAccountRepository
from adapter.sql.connection import Database
from adapter.sql.session_repository import SqlSessionRepository
from adapter.sql.user_repository import SqlUserRepository
from api.config import Settings, cors_origins_from_env
from api.middleware.auth import RouteGuardMiddleware
from api.routes import auth, health, pages, user, users
from domain.model.errors import StorageError
from domain.model.navigation import DEFAULT_ROUTE_TABLE, RouteTable
from utils.logging import setup_structured_logging

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Profile Hub"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build the database and session provider, dispose on shutdown."""
    settings: Settings = app.state.settings or Settings.from_env()
    setup_structured_logging(settings.log_level)

    database = Database(settings.database_url)
    if database.create_schema():
        logger.info("Database schema verified/created successfully")
    else:
        logger.warning("Failed to verify database schema")

    app.state.database = database
    app.state.session_provider = DatabaseSessionProvider(
        users=SqlUserRepository(database),
        accounts=SqlAccountRepository(database),
        sessions=SqlSessionRepository(database),
        secret=settings.auth_secret,
        cookie_secure=settings.secure_cookies,
    )

    yield  # App runs here

    app.state.session_provider = None
    app.state.database = None
    database.dispose()


def create_app(
    settings: Optional[Settings] = None,
    route_table: RouteTable = DEFAULT_ROUTE_TABLE,
) -> FastAPI:
    """Build the application. Settings are resolved from the environment at startup if not given."""
    app = FastAPI(
        title=SERVICE_NAME,
        description="User profiles behind session-based authentication",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.route_table = route_table
    app.state.database = None
    app.state.session_provider = None

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure", extra={"path": request.url.path, "error": str(exc)})
        return JSONResponse(status_code=503, content={"detail": "Database unavailable"})

    # Session cookies ride along with credentialed requests, so origins must be explicit
    cors_origins = settings.cors_origins if settings and settings.cors_origins else cors_origins_from_env()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RouteGuardMiddleware, route_table=route_table)

    # Register routes
    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(users.router)
    app.include_router(health.router)
    app.include_router(pages.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Disable uvicorn access logs to reduce noise
    # Application logs (via our structured logging) will still be captured
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
