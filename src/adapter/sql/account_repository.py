"""SQLAlchemy implementation of AccountRepository."""

from logging import getLogger

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from adapter.sql.connection import Database
from adapter.sql.tables import AccountRow, as_utc
from domain.model.errors import StorageError
from domain.model.session import CREDENTIAL_PROVIDER_ID, Account

logger = getLogger(__name__)


class SqlAccountRepository:
    def __init__(self, db: Database):
        self.db = db

    def _to_domain(self, row: AccountRow) -> Account:
        return Account(
            id=row.id,
            user_id=row.user_id,
            account_id=row.account_id,
            provider_id=row.provider_id,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
            password=row.password,
        )

    def create_credential(self, user_id: str, password_hash: str) -> Account:
        try:
            with self.db.session() as session:
                row = AccountRow(
                    user_id=user_id,
                    account_id=user_id,
                    provider_id=CREDENTIAL_PROVIDER_ID,
                    password=password_hash,
                )
                session.add(row)
                session.flush()
                return self._to_domain(row)
        except SQLAlchemyError as e:
            logger.error("Failed to create credential account", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to create account") from e

    def get_credential(self, user_id: str) -> Account | None:
        try:
            with self.db.session() as session:
                row = session.scalars(
                    select(AccountRow).where(
                        AccountRow.user_id == user_id,
                        AccountRow.provider_id == CREDENTIAL_PROVIDER_ID,
                    )
                ).first()
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to get credential account", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to get account") from e
