# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account operations:
# - POST /register: create an account, returns a token
# - POST /login: exchange credentials for a token
# - GET /verify: check a stored token is still valid
# - POST /change-password: replace the caller's password
# =============================================================================

import logging

from fastapi import APIRouter, status

from app.auth.dependencies import CurrentUser
from app.auth.models import ChangePasswordRequest, LoginRequest, RegisterRequest, VerifyResponse
from app.dependencies import AuthServiceDep
from core.models.user import AuthResponse, MessageResponse, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    auth: AuthServiceDep,
    request: RegisterRequest | None = None,
) -> AuthResponse:
    """
    Register a new account.

    Returns a token and the public user view.

    Raises:
        400: If email, name or password is missing
        409: If the email is already registered
    """
    request = request or RegisterRequest()
    return auth.register(request.email, request.name, request.password)


@router.post("/login", response_model=AuthResponse)
def login(
    auth: AuthServiceDep,
    request: LoginRequest | None = None,
) -> AuthResponse:
    """
    Log in with email and password.

    Raises:
        400: If email or password is missing
        401: If the credentials don't match an account
    """
    request = request or LoginRequest()
    return auth.login(request.email, request.password)


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(user: CurrentUser) -> VerifyResponse:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is missing, invalid or expired
    """
    return VerifyResponse(user=UserPublic(id=user.id, name=user.name, email=user.email))


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    user: CurrentUser,
    auth: AuthServiceDep,
    request: ChangePasswordRequest | None = None,
) -> MessageResponse:
    """
    Change the caller's password.

    Raises:
        400: If a field is missing, the new password is too short, or unchanged
        401: If the current password is incorrect
        404: If the account no longer exists
    """
    request = request or ChangePasswordRequest()
    auth.change_password(user, request.current_password, request.new_password)
    return MessageResponse(message="Password changed successfully!")
