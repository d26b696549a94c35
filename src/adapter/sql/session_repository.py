"""SQLAlchemy implementation of SessionRepository."""

from datetime import datetime, timezone
from logging import getLogger

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from adapter.sql.connection import Database
from adapter.sql.tables import SessionRow, as_utc
from domain.model.errors import StorageError
from domain.model.session import Session

logger = getLogger(__name__)


class SqlSessionRepository:
    def __init__(self, db: Database):
        self.db = db

    def _to_domain(self, row: SessionRow) -> Session:
        return Session(
            id=row.id,
            token=row.token,
            user_id=row.user_id,
            expires_at=as_utc(row.expires_at),
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
            ip_address=row.ip_address,
            user_agent=row.user_agent,
        )

    def create(
        self,
        user_id: str,
        token: str,
        expires_at: datetime,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        try:
            with self.db.session() as session:
                row = SessionRow(
                    user_id=user_id,
                    token=token,
                    expires_at=expires_at,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
                session.add(row)
                session.flush()
                return self._to_domain(row)
        except SQLAlchemyError as e:
            logger.error("Failed to create session", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to create session") from e

    def get_by_token(self, token: str) -> Session | None:
        try:
            with self.db.session() as session:
                row = session.scalars(select(SessionRow).where(SessionRow.token == token)).one_or_none()
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to get session", extra={"error": str(e)})
            raise StorageError("Failed to get session") from e

    def extend(self, token: str, expires_at: datetime) -> Session | None:
        try:
            with self.db.session() as session:
                stmt = (
                    update(SessionRow)
                    .where(SessionRow.token == token)
                    .values(expires_at=expires_at, updated_at=datetime.now(timezone.utc))
                    .returning(SessionRow)
                    .execution_options(synchronize_session=False)
                )
                row = session.scalars(stmt).one_or_none()
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to extend session", extra={"error": str(e)})
            raise StorageError("Failed to extend session") from e

    def delete(self, token: str) -> bool:
        try:
            with self.db.session() as session:
                result = session.execute(delete(SessionRow).where(SessionRow.token == token))
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("Failed to delete session", extra={"error": str(e)})
            raise StorageError("Failed to delete session") from e
