"""Current-user profile routes.

Endpoints:
- GET /api/user/profile: Profile of the signed-in user
- PATCH /api/user/update: Update name and/or image of the signed-in user
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import ProfileResponse, UpdateProfileRequest, UserResponse
from api.security import require_session
from domain.model.errors import NotFoundError, ValidationError
from domain.model.session import AuthSession
from port.user_repository import UserRepository
from services import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(auth: AuthSession = Depends(require_session)):
    """Get the current user's profile."""
    return ProfileResponse(user=UserResponse.from_domain(auth.user))


@router.patch("/update", response_model=ProfileResponse)
async def update_profile(
    body: Optional[UpdateProfileRequest] = None,
    auth: AuthSession = Depends(require_session),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update the current user's name and/or image.

    Raises:
        HTTPException: 400 if neither field is provided, 404 if the user vanished
    """
    if body is None:
        body = UpdateProfileRequest()
    try:
        user = profile_service.update_profile(repo, auth.user.id, name=body.name, image=body.image)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info("Profile updated", extra={
        "userId": user.id,
        "fields": [f for f in ("name", "image") if getattr(body, f)],
    })
    return ProfileResponse(user=UserResponse.from_domain(user))
