"""Session and credential domain models.

A Session is the server-side record behind the opaque credential a browser
presents. An Account holds the credential used to open sessions (for email
sign-in, the bcrypt password hash).
"""

from dataclasses import dataclass
from datetime import datetime

from domain.model.user import User

CREDENTIAL_PROVIDER_ID = 'credential'


@dataclass
class Session:
    """Server-side session record."""
    id: str
    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime
    updated_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass
class Account:
    """Sign-in method linked to a user."""
    id: str
    user_id: str
    account_id: str
    provider_id: str
    created_at: datetime
    updated_at: datetime
    password: str | None = None


@dataclass
class AuthSession:
    """A valid session together with the user it belongs to."""
    session: Session
    user: User
