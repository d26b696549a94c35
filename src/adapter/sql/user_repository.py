"""SQLAlchemy implementation of UserRepository."""

from logging import getLogger

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from adapter.sql.connection import Database
from adapter.sql.tables import UserRow, as_utc
from domain.model.errors import DuplicateError, StorageError
from domain.model.user import User

logger = getLogger(__name__)

UPDATABLE_FIELDS = frozenset({'name', 'image', 'updated_at'})


class SqlUserRepository:
    def __init__(self, db: Database):
        self.db = db

    def _to_domain(self, row: UserRow) -> User:
        """Convert an ORM row to the User domain model."""
        return User(
            id=row.id,
            name=row.name,
            email=row.email,
            email_verified=bool(row.email_verified),
            image=row.image,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )

    def create(self, email: str, name: str, image: str | None = None) -> User:
        """Create a new user and return the User object."""
        try:
            with self.db.session() as session:
                row = UserRow(email=email, name=name, image=image)
                session.add(row)
                session.flush()
                user = self._to_domain(row)
        except IntegrityError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("Email already registered")
        except SQLAlchemyError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise StorageError("Failed to create user") from e

        logger.info("User created", extra={"userId": user.id, "email": email})
        return user

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            with self.db.session() as session:
                row = session.scalars(select(UserRow).where(UserRow.email == email)).one_or_none()
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise StorageError("Failed to get user") from e

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            with self.db.session() as session:
                row = session.get(UserRow, user_id)
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to get user") from e

    def list_all(self) -> list[User]:
        try:
            with self.db.session() as session:
                rows = session.scalars(select(UserRow).order_by(UserRow.created_at)).all()
                return [self._to_domain(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise StorageError("Failed to list users") from e

    def update_fields(self, user_id: str, fields: dict) -> User | None:
        """Apply fields in a single UPDATE ... RETURNING and return the updated User."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")

        try:
            with self.db.session() as session:
                stmt = (
                    update(UserRow)
                    .where(UserRow.id == user_id)
                    .values(**fields)
                    .returning(UserRow)
                    .execution_options(synchronize_session=False)
                )
                row = session.scalars(stmt).one_or_none()
                return self._to_domain(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to update user") from e

    def delete(self, user_id: str) -> bool:
        """Delete a user; accounts and sessions go with it through ON DELETE CASCADE."""
        try:
            with self.db.session() as session:
                result = session.execute(delete(UserRow).where(UserRow.id == user_id))
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to delete user") from e
