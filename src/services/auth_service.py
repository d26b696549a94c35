"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from functools import lru_cache

import bcrypt

from domain.model.errors import AuthenticationError, DomainError, DuplicateError, ValidationError
from domain.model.user import User
from port.account_repository import AccountRepository
from port.user_repository import UserRepository

BCRYPT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
BCRYPT_MAX_BYTES = 72

logger = logging.getLogger(__name__)


# bcrypt rejects inputs longer than 72 bytes
def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return _hash_password("not-a-real-password")


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_LENGTH} characters")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register(
    users: UserRepository,
    accounts: AccountRepository,
    email: str,
    password: str,
    name: str,
) -> User:
    """Register a new user with an email/password credential.

    Returns the created User domain object.

    Raises:
        DuplicateError: email already registered
        ValidationError: name missing or password outside the allowed length
    """
    email = normalize_email(email)
    if not name or not name.strip():
        raise ValidationError("Name is required")
    if users.get_by_email(email):
        raise DuplicateError("Email already registered")

    _validate_password(password)
    password_hash = _hash_password(password)

    user = users.create(email=email, name=name.strip())
    try:
        accounts.create_credential(user.id, password_hash)
    except DomainError:
        # Never leave a user behind without a credential
        try:
            users.delete(user.id)
        except DomainError as e:
            logger.error("Failed to remove user after credential write failed", extra={
                "userId": user.id,
                "error": str(e),
            })
        raise
    return user


def authenticate(
    users: UserRepository,
    accounts: AccountRepository,
    email: str,
    password: str,
) -> User:
    """Authenticate a user by email and password.

    Returns the authenticated User domain object.
    Doesn't reveal whether the email exists.

    Raises:
        AuthenticationError: invalid credentials (deliberately vague)
    """
    user = users.get_by_email(normalize_email(email))
    account = accounts.get_credential(user.id) if user else None
    if not account or not account.password:
        # Unknown email pays the same bcrypt check as a wrong password
        _verify_password(password, _dummy_hash())
        raise AuthenticationError("Invalid email or password")
    if not _verify_password(password, account.password):
        raise AuthenticationError("Invalid email or password")
    return user
