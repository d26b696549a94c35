"""Pydantic models for API request/response.

Responses use camelCase field names (createdAt, updatedAt, emailVerified).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from domain.model.session import AuthSession, Session
from domain.model.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(CamelModel):
    """Public view of a user record."""
    id: str
    name: str
    email: str
    email_verified: bool = False
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            email_verified=user.email_verified,
            image=user.image,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class SessionResponse(CamelModel):
    """Public view of a session; the opaque token is never echoed back."""
    id: str
    user_id: str
    expires_at: datetime
    created_at: datetime
    updated_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_domain(cls, session: Session) -> "SessionResponse":
        return cls(
            id=session.id,
            user_id=session.user_id,
            expires_at=session.expires_at,
            created_at=session.created_at,
            updated_at=session.updated_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
        )


class CurrentSessionResponse(CamelModel):
    """Response model for GET /api/auth/get-session."""
    session: SessionResponse
    user: UserResponse

    @classmethod
    def from_domain(cls, auth: AuthSession) -> "CurrentSessionResponse":
        return cls(
            session=SessionResponse.from_domain(auth.session),
            user=UserResponse.from_domain(auth.user),
        )


class SignUpRequest(BaseModel):
    """Request model for email registration."""
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str


class SignInRequest(BaseModel):
    """Request model for email sign-in."""
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    """Response model for sign-in and sign-up."""
    token: str = Field(..., description="Signed session credential (also set as a cookie)")
    user: UserResponse


class SuccessResponse(BaseModel):
    success: bool = True


class ProfileResponse(CamelModel):
    """Response model for the current user's profile."""
    success: bool = True
    user: UserResponse


class UpdateProfileRequest(BaseModel):
    """Request model for PATCH /api/user/update. Empty strings count as absent."""
    name: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = Field(None, max_length=2048)


class UserListResponse(CamelModel):
    """Response model for GET /api/users."""
    success: bool = True
    data: list[UserResponse]
