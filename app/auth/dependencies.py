# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# The auth gateway for protected routes.
#
# Reads the bearer token from the Authorization header and verifies it.
# The decoded identity claim is handed to the route as an argument; the
# credential store is never consulted, so a token stays valid until it
# expires even if the account changes in the meantime.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader

from app.dependencies import get_token_service
from app.exceptions import AuthenticationRequiredError, InvalidTokenError
from core.models.user import AuthUser
from core.services.token_service import TokenService

logger = logging.getLogger(__name__)

# Raw Authorization header. The token is the second word whatever the
# scheme; missing headers are reported by get_current_user so every 401
# has the same body shape.
security = APIKeyHeader(name="Authorization", auto_error=False)


def _extract_token(authorization: str | None) -> str | None:
    parts = (authorization or "").split()
    return parts[1] if len(parts) > 1 else None


async def get_current_user(
    authorization: str | None = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> AuthUser:
    """
    Extract and validate the caller from a bearer token.

    Returns:
        AuthUser: The authenticated user

    Raises:
        AuthenticationRequiredError: 401 if no token was sent
        InvalidTokenError: 401 if the token is invalid or expired
    """
    token = _extract_token(authorization)
    if token is None:
        raise AuthenticationRequiredError()

    user = tokens.verify(token)
    if user is None:
        logger.warning("Rejected request with invalid or expired token")
        raise InvalidTokenError()

    return user


CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
