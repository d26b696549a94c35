from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, email: str, name: str, image: str | None = None) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def list_all(self) -> list[User]:
        """Return every user, oldest first."""
        ...

    def update_fields(self, user_id: str, fields: dict) -> User | None:
        """Apply fields atomically and return the updated User, or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user with its accounts and sessions. Return True if a row was removed."""
        ...
