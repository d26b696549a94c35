"""In-memory implementation of AccountRepository for testing."""

import uuid
from datetime import datetime, timezone
from domain.model.session import CREDENTIAL_PROVIDER_ID, Account


class FakeAccountRepository:
    def __init__(self):
        self.store: dict[str, Account] = {}

    def create_credential(self, user_id: str, password_hash: str) -> Account:
        now = datetime.now(timezone.utc)
        account = Account(
            id=uuid.uuid4().hex,
            user_id=user_id,
            account_id=user_id,
            provider_id=CREDENTIAL_PROVIDER_ID,
            created_at=now,
            updated_at=now,
            password=password_hash,
        )
        self.store[account.id] = account
        return account

    def get_credential(self, user_id: str) -> Account | None:
        for account in self.store.values():
            if account.user_id == user_id and account.provider_id == CREDENTIAL_PROVIDER_ID:
                return account
        return None
