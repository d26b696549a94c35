"""Database-backed session provider.

Implements SessionProvider on top of the user/account/session repositories.
Each session is a server-side record keyed by a random opaque token. The
client receives that token wrapped in a JWT signed with the auth secret, as a
cookie or a Bearer header, so a forged or tampered credential is rejected
before the database is consulted.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Mapping

from jose import JWTError, jwt
from starlette.requests import cookie_parser

from domain.model.session import AuthSession
from port.account_repository import AccountRepository
from port.session_repository import SessionRepository
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "profile_hub.session_token"
TOKEN_ALGORITHM = "HS256"
SESSION_EXPIRES_IN = timedelta(days=7)
SESSION_UPDATE_AGE = timedelta(days=1)


class DatabaseSessionProvider:
    def __init__(
        self,
        users: UserRepository,
        accounts: AccountRepository,
        sessions: SessionRepository,
        secret: str,
        *,
        expires_in: timedelta = SESSION_EXPIRES_IN,
        update_age: timedelta = SESSION_UPDATE_AGE,
        cookie_name: str = SESSION_COOKIE_NAME,
        cookie_secure: bool = False,
    ):
        if not secret:
            raise ValueError("Session provider requires a non-empty secret")
        self.users = users
        self.accounts = accounts
        self.sessions = sessions
        self.secret = secret
        self.expires_in = expires_in
        self.update_age = update_age
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    # ── credential transport ─────────────────────────────────

    def encode_token(self, auth: AuthSession) -> str:
        # Expiry lives on the server-side record so it can slide; the JWT only proves origin
        payload = {
            "sid": auth.session.token,
            "sub": auth.user.id,
            "iat": auth.session.created_at,
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)

    def _decode_token(self, credential: str) -> str | None:
        """Return the opaque session token inside a signed credential, or None."""
        try:
            payload = jwt.decode(credential, self.secret, algorithms=[TOKEN_ALGORITHM])
        except JWTError as e:
            logger.debug(f"Session credential rejected: {e}")
            return None
        sid = payload.get("sid")
        return sid if isinstance(sid, str) and sid else None

    def _read_credential(self, headers: Mapping[str, str]) -> str | None:
        authorization = headers.get("authorization")
        if authorization:
            scheme, _, value = authorization.partition(" ")
            if scheme.lower() == "bearer" and value.strip():
                return value.strip()
        cookie_header = headers.get("cookie")
        if cookie_header:
            return cookie_parser(cookie_header).get(self.cookie_name) or None
        return None

    # ── session lookup ───────────────────────────────────────

    def get_session(self, headers: Mapping[str, str]) -> AuthSession | None:
        """Resolve the session presented in the request headers.

        Returns None for a missing, forged, expired or orphaned session.
        Storage failures propagate.
        """
        credential = self._read_credential(headers)
        if not credential:
            return None

        token = self._decode_token(credential)
        if not token:
            return None

        session = self.sessions.get_by_token(token)
        if not session:
            return None

        now = datetime.now(timezone.utc)
        if session.is_expired(now):
            self.sessions.delete(token)
            logger.debug("Expired session removed", extra={"userId": session.user_id})
            return None

        user = self.users.get_by_id(session.user_id)
        if not user:
            self.sessions.delete(token)
            return None

        # Sliding expiry: refresh at most once per update_age
        if session.expires_at - self.expires_in + self.update_age <= now:
            session = self.sessions.extend(token, now + self.expires_in) or session

        return AuthSession(session=session, user=user)

    # ── sign in / sign up / sign out ─────────────────────────

    def _open_session(self, user, headers: Mapping[str, str] | None) -> AuthSession:
        headers = headers or {}
        session = self.sessions.create(
            user_id=user.id,
            token=secrets.token_urlsafe(32),
            expires_at=datetime.now(timezone.utc) + self.expires_in,
            ip_address=headers.get("x-forwarded-for", "").split(",")[0].strip() or None,
            user_agent=headers.get("user-agent"),
        )
        return AuthSession(session=session, user=user)

    def sign_up_email(
        self, name: str, email: str, password: str, headers: Mapping[str, str] | None = None
    ) -> AuthSession:
        user = auth_service.register(self.users, self.accounts, email=email, password=password, name=name)
        logger.info("User registered", extra={"userId": user.id, "email": user.email})
        return self._open_session(user, headers)

    def sign_in_email(
        self, email: str, password: str, headers: Mapping[str, str] | None = None
    ) -> AuthSession:
        user = auth_service.authenticate(self.users, self.accounts, email=email, password=password)
        logger.info("User signed in", extra={"userId": user.id, "email": user.email})
        return self._open_session(user, headers)

    def sign_out(self, headers: Mapping[str, str]) -> bool:
        credential = self._read_credential(headers)
        token = self._decode_token(credential) if credential else None
        if not token:
            return False
        removed = self.sessions.delete(token)
        if removed:
            logger.info("User signed out")
        return removed
