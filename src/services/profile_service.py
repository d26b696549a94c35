"""Profile service — reading and updating user profiles."""

from datetime import datetime, timezone

from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository


def update_profile(
    repo: UserRepository,
    user_id: str,
    name: str | None = None,
    image: str | None = None,
) -> User:
    """Apply the provided profile fields and refresh updated_at.

    Empty strings count as absent.

    Raises:
        ValidationError: neither name nor image provided
        NotFoundError: user no longer exists
    """
    fields: dict = {}
    if name:
        fields['name'] = name
    if image:
        fields['image'] = image
    if not fields:
        raise ValidationError("At least one field (name or image) must be provided")

    fields['updated_at'] = datetime.now(timezone.utc)
    user = repo.update_fields(user_id, fields)
    if not user:
        raise NotFoundError("User not found")
    return user


def list_users(repo: UserRepository) -> list[User]:
    return repo.list_all()
