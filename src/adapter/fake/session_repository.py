"""In-memory implementation of SessionRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from domain.model.session import Session


class FakeSessionRepository:
    def __init__(self):
        self.store: dict[str, Session] = {}

    def create(
        self,
        user_id: str,
        token: str,
        expires_at: datetime,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        now = datetime.now(timezone.utc)
        session = Session(
            id=uuid.uuid4().hex,
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.store[token] = session
        return replace(session)

    def get_by_token(self, token: str) -> Session | None:
        session = self.store.get(token)
        return replace(session) if session else None

    def extend(self, token: str, expires_at: datetime) -> Session | None:
        session = self.store.get(token)
        if not session:
            return None
        session.expires_at = expires_at
        session.updated_at = datetime.now(timezone.utc)
        return replace(session)

    def delete(self, token: str) -> bool:
        return self.store.pop(token, None) is not None
