import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from adapter.sql.tables import Base

logger = logging.getLogger(__name__)

# Engine echo goes through logging; keep it quiet unless asked for
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)


def normalize_database_url(url: str) -> str:
    """Point bare Postgres URLs at the psycopg (v3) driver.

    Hosted Postgres providers hand out 'postgres://' or 'postgresql://' URLs,
    which SQLAlchemy would otherwise map to psycopg2.
    """
    for prefix in ('postgres://', 'postgresql://'):
        if url.startswith(prefix):
            return 'postgresql+psycopg://' + url[len(prefix):]
    return url


class Database:
    """Engine and session factory for the relational store.

    Constructed once at application startup and disposed at shutdown.
    The engine owns the connection pool; connections are opened lazily by
    the pool on first checkout.
    """

    def __init__(self, url: str, **engine_kwargs):
        url = normalize_database_url(url)
        if url.startswith('postgresql'):
            engine_kwargs.setdefault('pool_pre_ping', True)
            engine_kwargs.setdefault('pool_size', 5)
            engine_kwargs.setdefault('max_overflow', 5)
            engine_kwargs.setdefault('pool_recycle', 300)  # hosted Postgres drops idle connections
        self.engine: Engine = create_engine(url, **engine_kwargs)
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield an ORM session inside a transaction; commit on success, roll back on error."""
        with self._session_factory.begin() as session:
            yield session

    def create_schema(self) -> bool:
        """Create missing tables. Return True on success."""
        try:
            Base.metadata.create_all(self.engine)
            logger.info("[DATABASE] Schema verified/created")
            return True
        except SQLAlchemyError as e:
            logger.error("[DATABASE] Failed to create schema", extra={"error": str(e)[:200]})
            return False

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text('SELECT 1'))
            return True
        except SQLAlchemyError as e:
            logger.debug("[DATABASE] Ping failed", extra={"error": str(e)[:200]})
            return False

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("[DATABASE] Connection pool disposed")
