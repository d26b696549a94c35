"""Shared wiring for API tests: an app backed by in-memory repositories."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import FastAPI
from fastapi.testclient import TestClient

from adapter.auth.session_provider import DatabaseSessionProvider
from adapter.fake.account_repository import FakeAccountRepository
from adapter.fake.session_repository import FakeSessionRepository
from adapter.fake.user_repository import FakeUserRepository
from api.config import Settings
from api.dependencies import get_user_repo
from api.main import create_app
from domain.model.session import AuthSession
from domain.model.user import User

TEST_SECRET = "test-secret-key-for-session-signing"


@dataclass
class Harness:
    app: FastAPI
    client: TestClient
    users: FakeUserRepository
    accounts: FakeAccountRepository
    sessions: FakeSessionRepository
    provider: DatabaseSessionProvider

    def open_session(self, email: str = "ada@example.com", name: str = "Ada") -> tuple[User, dict]:
        """Create a user with a live session (skipping password hashing).

        Returns the user and request headers carrying the session cookie.
        """
        user = self.users.get_by_email(email) or self.users.create(email=email, name=name)
        session = self.sessions.create(
            user_id=user.id,
            token=secrets.token_urlsafe(16),
            expires_at=datetime.now(timezone.utc) + timedelta(days=7),
        )
        credential = self.provider.encode_token(AuthSession(session=session, user=user))
        return user, {"Cookie": f"{self.provider.cookie_name}={credential}"}


def build_harness(with_provider: bool = True) -> Harness:
    app = create_app(settings=Settings(database_url="sqlite://", auth_secret=TEST_SECRET))
    users = FakeUserRepository()
    accounts = FakeAccountRepository()
    sessions = FakeSessionRepository()
    provider = DatabaseSessionProvider(users, accounts, sessions, TEST_SECRET)

    if with_provider:
        app.state.session_provider = provider
    app.dependency_overrides[get_user_repo] = lambda: users

    client = TestClient(app, follow_redirects=False)
    return Harness(app, client, users, accounts, sessions, provider)
