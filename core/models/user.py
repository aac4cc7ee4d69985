# =============================================================================
# core/models/user.py - User & Identity Schemas
# =============================================================================
# - AuthUser: The identity claim carried inside an access token
# - UserPublic: What clients may see about a user (never the password hash)
# - AuthResponse: Token + public user, returned by register and login
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated caller extracted from a bearer token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str


class UserPublic(BaseModel):
    """Public view of a user."""

    id: str = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "UserPublic":
        """Strip a stored user record down to its public fields."""
        return cls(id=str(record["id"]), name=record["name"], email=record["email"])


class AuthResponse(BaseModel):
    """
    Returned by register and login.

    Example:
        {
            "token": "eyJhbGciOi...",
            "user": {"id": "...", "name": "A", "email": "a@x.com"}
        }
    """
    token: str
    user: UserPublic


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
