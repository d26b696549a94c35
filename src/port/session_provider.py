from datetime import timedelta
from typing import Mapping, Protocol
from domain.model.session import AuthSession


class SessionProvider(Protocol):
    """Protocol for the component that issues and validates sessions.

    get_session never raises for a missing or invalid credential; it returns
    None. Only provider-level failures (e.g. StorageError) propagate.
    """
    cookie_name: str
    cookie_secure: bool
    expires_in: timedelta

    def get_session(self, headers: Mapping[str, str]) -> AuthSession | None:
        ...

    def sign_in_email(
        self, email: str, password: str, headers: Mapping[str, str] | None = None
    ) -> AuthSession:
        ...

    def sign_up_email(
        self, name: str, email: str, password: str, headers: Mapping[str, str] | None = None
    ) -> AuthSession:
        ...

    def sign_out(self, headers: Mapping[str, str]) -> bool:
        ...

    def encode_token(self, auth: AuthSession) -> str:
        """Return the signed credential to hand back to the client."""
        ...
