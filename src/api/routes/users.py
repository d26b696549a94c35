"""User directory route.

GET /api/users lists every user and is reachable without a session.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import UserListResponse, UserResponse
from domain.model.errors import StorageError
from port.user_repository import UserRepository
from services import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users", response_model=UserListResponse)
async def list_users(repo: UserRepository = Depends(get_user_repo)):
    """List all users."""
    try:
        users = profile_service.list_users(repo)
    except StorageError as e:
        logger.error("Error fetching users", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users",
        )
    return UserListResponse(data=[UserResponse.from_domain(u) for u in users])
