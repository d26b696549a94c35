from datetime import datetime
from typing import Protocol
from domain.model.session import Session


class SessionRepository(Protocol):
    """Protocol defining the interface for server-side session records."""
    def create(
        self,
        user_id: str,
        token: str,
        expires_at: datetime,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        ...

    def get_by_token(self, token: str) -> Session | None:
        ...

    def extend(self, token: str, expires_at: datetime) -> Session | None:
        """Move the expiry of a session forward. Return None if it no longer exists."""
        ...

    def delete(self, token: str) -> bool:
        """Delete a session. Return True if a record was removed."""
        ...
