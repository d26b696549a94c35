"""Authentication routes (sign up, sign in, sign out, current session).

Endpoints:
- POST /api/auth/sign-up/email: Register with email + password and sign in
- POST /api/auth/sign-in/email: Sign in with email + password
- POST /api/auth/sign-out: End the current session
- GET /api/auth/get-session: Current session and user, or null
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.dependencies import get_session_provider
from api.models import (
    AuthResponse,
    CurrentSessionResponse,
    SignInRequest,
    SignUpRequest,
    SuccessResponse,
    UserResponse,
)
from api.security import get_session
from domain.model.errors import AuthenticationError, DuplicateError, ValidationError
from domain.model.session import AuthSession
from port.session_provider import SessionProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, provider: SessionProvider, auth: AuthSession) -> str:
    token = provider.encode_token(auth)
    response.set_cookie(
        key=provider.cookie_name,
        value=token,
        max_age=int(provider.expires_in.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=provider.cookie_secure,
        path="/",
    )
    return token


@router.post("/sign-up/email", response_model=AuthResponse)
async def sign_up_email(
    body: SignUpRequest,
    request: Request,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider),
):
    """Register a new user and open a session.

    Raises:
        HTTPException: 409 if the email is taken, 400 if validation fails
    """
    try:
        auth = provider.sign_up_email(
            name=body.name, email=body.email, password=body.password, headers=request.headers
        )
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    token = _set_session_cookie(response, provider, auth)
    return AuthResponse(token=token, user=UserResponse.from_domain(auth.user))


@router.post("/sign-in/email", response_model=AuthResponse)
async def sign_in_email(
    body: SignInRequest,
    request: Request,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider),
):
    """Sign in with email and password.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        auth = provider.sign_in_email(email=body.email, password=body.password, headers=request.headers)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    token = _set_session_cookie(response, provider, auth)
    return AuthResponse(token=token, user=UserResponse.from_domain(auth.user))


@router.post("/sign-out", response_model=SuccessResponse)
async def sign_out(
    request: Request,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider),
):
    """End the current session. Succeeds even when no session was presented."""
    provider.sign_out(request.headers)
    response.delete_cookie(
        key=provider.cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=provider.cookie_secure,
    )
    return SuccessResponse()


@router.get("/get-session", response_model=Optional[CurrentSessionResponse])
async def read_session(auth: Optional[AuthSession] = Depends(get_session)):
    """Return the current session and user, or null for anonymous callers."""
    if auth is None:
        return None
    return CurrentSessionResponse.from_domain(auth)
