"""Application settings read from the environment.

Settings are read once, in the application lifespan, never at import time:

    DATABASE_URL   Postgres connection string (required)
    AUTH_SECRET    key used to sign session credentials (required)
    AUTH_BASE_URL  public base URL of the site (default http://localhost:3000)
    CORS_ORIGINS   comma-separated allowed origins (default: AUTH_BASE_URL)
    LOG_LEVEL      root log level (default INFO)
"""

import os
from dataclasses import dataclass, field

DEFAULT_BASE_URL = "http://localhost:3000"


@dataclass(frozen=True)
class Settings:
    database_url: str
    auth_secret: str
    auth_base_url: str = DEFAULT_BASE_URL
    cors_origins: list[str] = field(default_factory=list)
    log_level: str = "INFO"

    @property
    def secure_cookies(self) -> bool:
        return self.auth_base_url.startswith("https://")

    @classmethod
    def from_env(cls) -> "Settings":
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is not set")

        auth_secret = os.getenv("AUTH_SECRET")
        if not auth_secret:
            raise ValueError(
                "AUTH_SECRET environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        base_url = os.getenv("AUTH_BASE_URL") or DEFAULT_BASE_URL

        return cls(
            database_url=database_url,
            auth_secret=auth_secret,
            auth_base_url=base_url.rstrip("/"),
            cors_origins=cors_origins_from_env(),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )


def cors_origins_from_env() -> list[str]:
    """Allowed CORS origins; defaults to the site's own base URL."""
    cors_env = os.getenv("CORS_ORIGINS") or os.getenv("AUTH_BASE_URL") or DEFAULT_BASE_URL
    # Strip whitespace from each origin to handle "origin1, origin2" format
    return [origin.strip().rstrip("/") for origin in cors_env.split(",") if origin.strip()]
