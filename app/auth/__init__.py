# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer-token authentication for the WellNest API.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import CurrentUser, get_current_user
from core.models.user import AuthUser

__all__ = [
    "get_current_user",
    "CurrentUser",
    "AuthUser",
]
