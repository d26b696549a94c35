from typing import Protocol
from domain.model.session import Account


class AccountRepository(Protocol):
    """Protocol defining the interface for sign-in credentials."""
    def create_credential(self, user_id: str, password_hash: str) -> Account:
        """Store the password hash for a user's email sign-in."""
        ...

    def get_credential(self, user_id: str) -> Account | None:
        ...
