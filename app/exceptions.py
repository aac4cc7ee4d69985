# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error a client can see is one of five kinds:
#   ValidationError (400), AuthError (401), NotFoundError (404),
#   ConflictError (409), ServerError (500)
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WellNestException(Exception):
    """
    Base exception for the WellNest API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "WELLNEST_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Error Kinds
# =============================================================================

class ValidationError(WellNestException):
    """Malformed or missing input."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, **kwargs)


class AuthError(WellNestException):
    """Missing or invalid credentials or token."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, code="AUTH_ERROR", status_code=401, **kwargs)


class NotFoundError(WellNestException):
    """Missing resource, or one the caller does not own."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="NOT_FOUND", status_code=404, **kwargs)


class ConflictError(WellNestException):
    """Resource already exists."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="CONFLICT", status_code=409, **kwargs)


class ServerError(WellNestException):
    """Opaque failure. The cause is logged, never returned."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, code="INTERNAL_ERROR", status_code=500)


# =============================================================================
# Auth Exceptions
# =============================================================================

class MissingFieldsError(ValidationError):
    """Raised when required body fields are empty or absent."""

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            suggestion="Provide a non-empty value for every required field",
            details={"fields": fields},
        )


class PasswordTooShortError(ValidationError):
    """Raised when a new password is below the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"New password must be at least {min_length} characters long.",
            details={"min_length": min_length},
        )


class PasswordUnchangedError(ValidationError):
    """Raised when the new password equals the current one."""

    def __init__(self):
        super().__init__("New password cannot be the same as the current password.")


class InvalidCredentialsError(AuthError):
    """
    Raised on a failed login.

    Unknown email and wrong password share this message so a caller
    cannot probe which accounts exist.
    """

    def __init__(self):
        super().__init__("Invalid Email or Password")


class AuthenticationRequiredError(AuthError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self):
        super().__init__(
            "Authentication required",
            suggestion="Send an 'Authorization: Bearer <token>' header",
        )


class InvalidTokenError(AuthError):
    """Raised when a bearer token is malformed, tampered with, or expired."""

    def __init__(self):
        super().__init__(
            "Invalid or expired token",
            suggestion="Log in again to obtain a fresh token",
        )


class IncorrectPasswordError(AuthError):
    """Raised when the current password supplied for a change is wrong."""

    def __init__(self):
        super().__init__("Current password is incorrect.")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "Email already in use",
            suggestion="Log in instead, or register with a different email",
            details={"email": email},
        )


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated user's record no longer exists."""

    def __init__(self, user_id: str):
        super().__init__("User not found.", details={"user_id": user_id})


# =============================================================================
# Session Exceptions
# =============================================================================

class SessionNotFoundError(NotFoundError):
    """Raised when a session ID doesn't exist or isn't owned by the caller."""

    def __init__(self, session_id: str):
        super().__init__(
            "Session not found.",
            suggestion="Check that the session ID is correct",
            details={"session_id": session_id},
        )


class InvalidSessionIdError(ValidationError):
    """Raised when a session ID is not a well-formed identifier."""

    def __init__(self, session_id: str):
        super().__init__(
            "Invalid session ID format.",
            suggestion="Session IDs are UUIDs",
            details={"session_id": session_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def wellnest_exception_handler(
    request: Request,
    exc: WellNestException
) -> JSONResponse:
    """
    Convert WellNestException to JSON response.

    Returns structured error with:
    - message / detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors on request bodies and parameters.

    Reported as 400 so malformed input has a single status code.
    """
    errors = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "message": "Validation error",
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def server_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without leaking their cause."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ServerError().to_dict(),
    )
