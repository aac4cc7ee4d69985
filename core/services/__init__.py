# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .password_hasher import PasswordHasher
from .session_service import SessionService
from .token_service import TokenService

__all__ = [
    "AuthService",
    "PasswordHasher",
    "SessionService",
    "TokenService",
]
