"""Client-side auth state and actions.

AuthClient keeps the current session as seen from the client and exposes
login/register/logout actions for UI code. Actions never raise: failures come
back as AuthResult(success=False, error=message).

    client = AuthClient(httpx.Client(base_url="http://localhost:8000"))
    result = client.login("ada@example.com", "correct horse")
    if result.success:
        print(client.user["name"])
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

SIGN_IN_ROUTE = "/sign-in"

SessionListener = Callable[[Optional[dict]], None]


@dataclass(frozen=True)
class AuthResult:
    success: bool
    error: Optional[str] = None


def _error_message(error: Exception, default: str) -> str:
    """Prefer the server's detail message, then the transport error text, then the default."""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if isinstance(detail, str) and detail:
            return detail
        return default
    if isinstance(error, httpx.HTTPError):
        return str(error) or default
    return default


class AuthClient:
    def __init__(
        self,
        http: httpx.Client,
        navigate: Optional[Callable[[str], Any]] = None,
    ):
        self.http = http
        self.current_path: Optional[str] = None
        self._navigate = navigate or self._record_navigation
        self._session: Optional[dict] = None
        self._listeners: list[SessionListener] = []

    # ── derived state ────────────────────────────────────────

    @property
    def session(self) -> Optional[dict]:
        """Current {session, user} payload, or None when signed out."""
        return self._session

    @property
    def user(self) -> Optional[dict]:
        return self._session["user"] if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call listener whenever the session changes. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _set_session(self, session: Optional[dict]) -> None:
        if session == self._session:
            return
        self._session = session
        for listener in list(self._listeners):
            listener(session)

    def _record_navigation(self, path: str) -> None:
        self.current_path = path

    def refresh(self) -> Optional[dict]:
        """Re-read the session from the server."""
        response = self.http.get("/api/auth/get-session")
        response.raise_for_status()
        data = response.json()
        if data is not None and not isinstance(data, dict):
            raise ValueError("Unexpected session payload")
        self._set_session(data)
        return self._session

    # ── actions ──────────────────────────────────────────────

    def login(self, email: str, password: str) -> AuthResult:
        try:
            response = self.http.post(
                "/api/auth/sign-in/email", json={"email": email, "password": password}
            )
            response.raise_for_status()
            self.refresh()
            return AuthResult(success=True)
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"Sign in failed: {e}")
            return AuthResult(success=False, error=_error_message(e, "Failed to sign in"))

    def register(self, name: str, email: str, password: str) -> AuthResult:
        try:
            response = self.http.post(
                "/api/auth/sign-up/email",
                json={"name": name, "email": email, "password": password},
            )
            response.raise_for_status()
            self.refresh()
            return AuthResult(success=True)
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"Sign up failed: {e}")
            return AuthResult(success=False, error=_error_message(e, "Failed to create account"))

    def logout(self) -> AuthResult:
        try:
            response = self.http.post("/api/auth/sign-out")
            response.raise_for_status()
            self._set_session(None)
            self._navigate(SIGN_IN_ROUTE)
            return AuthResult(success=True)
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"Sign out failed: {e}")
            return AuthResult(success=False, error=_error_message(e, "Failed to sign out"))
