# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Identity claim and public user views
# - session.py: Wellness session CRUD schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Accounts and identity
# -----------------------------------------------------------------------------
from .user import (
    AuthResponse,
    AuthUser,
    MessageResponse,
    UserPublic,
)

# -----------------------------------------------------------------------------
# Session Models - Wellness session management
# -----------------------------------------------------------------------------
from .session import (
    LikeResponse,
    SessionCreate,
    SessionResponse,
    SessionStatus,
    SessionUpdate,
)

__all__ = [
    # User
    "AuthResponse",
    "AuthUser",
    "MessageResponse",
    "UserPublic",
    # Session
    "LikeResponse",
    "SessionCreate",
    "SessionResponse",
    "SessionStatus",
    "SessionUpdate",
]
