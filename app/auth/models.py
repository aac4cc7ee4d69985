# =============================================================================
# app/auth/models.py - Authentication Request/Response Models
# =============================================================================
# Bodies of the /api/auth endpoints.
#
# Fields are optional at the schema level so a missing field is reported
# by the service with the list of what is missing, not as a schema error.
# =============================================================================

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from core.models.user import UserPublic


class RegisterRequest(BaseModel):
    """Body of POST /register."""
    email: str | None = Field(default=None, examples=["a@x.com"])
    name: str | None = Field(default=None, examples=["A"])
    password: str | None = Field(default=None, examples=["pass1234"])


class LoginRequest(BaseModel):
    """Body of POST /login."""
    email: str | None = Field(default=None, examples=["a@x.com"])
    password: str | None = Field(default=None, examples=["pass1234"])


class ChangePasswordRequest(BaseModel):
    """Body of POST /change-password."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("currentPassword", "current_password"),
    )
    new_password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("newPassword", "new_password"),
    )


class VerifyResponse(BaseModel):
    """Identity claim of a valid token."""
    user: UserPublic
