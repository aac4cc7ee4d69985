# =============================================================================
# core/services/auth_service.py - Account Business Logic
# =============================================================================
# Registration, login and password change over the credential store.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging

from app.exceptions import (
    EmailAlreadyRegisteredError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    MissingFieldsError,
    PasswordTooShortError,
    PasswordUnchangedError,
    UserNotFoundError,
)
from core.models.user import AuthResponse, AuthUser, UserPublic
from core.services.password_hasher import PasswordHasher
from core.services.token_service import TokenService
from lib.repositories import DuplicateRecordError, UserRepository

logger = logging.getLogger(__name__)


def _require(**fields: str | None) -> None:
    """Raise MissingFieldsError naming every empty field."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingFieldsError(missing)


class AuthService:
    """
    Service for account operations.

    Provides a clean interface between API routes and the credential store.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
        min_password_length: int = 4,
    ):
        self.users = users
        self.tokens = tokens
        self.hasher = hasher
        self.min_password_length = min_password_length

    def _authenticated(self, record: dict) -> AuthResponse:
        user = UserPublic.from_record(record)
        return AuthResponse(token=self.tokens.issue(user), user=user)

    def register(self, email: str | None, name: str | None, password: str | None) -> AuthResponse:
        """
        Create an account and log it in.

        Raises:
            MissingFieldsError: If any field is empty
            EmailAlreadyRegisteredError: If the email already has an account
        """
        _require(email=email, name=name, password=password)

        if self.users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        try:
            record = self.users.create(
                email=email,
                name=name,
                password_hash=self.hasher.hash(password),
            )
        except DuplicateRecordError:
            # Lost a race with a concurrent registration
            raise EmailAlreadyRegisteredError(email)

        logger.info(f"Registered user: {record['id']}")
        return self._authenticated(record)

    def login(self, email: str | None, password: str | None) -> AuthResponse:
        """
        Exchange email and password for a token.

        Raises:
            MissingFieldsError: If either field is empty
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        _require(email=email, password=password)

        record = self.users.get_by_email(email)
        if record is None or not self.hasher.verify(password, record["password_hash"]):
            logger.warning("Rejected login attempt")
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {record['id']}")
        return self._authenticated(record)

    def change_password(
        self,
        caller: AuthUser,
        current_password: str | None,
        new_password: str | None,
    ) -> None:
        """
        Replace the caller's password. Existing tokens stay valid.

        Raises:
            MissingFieldsError: If either password is empty
            PasswordTooShortError: If the new password is below the minimum length
            UserNotFoundError: If the caller's account no longer exists
            IncorrectPasswordError: If the current password is wrong
            PasswordUnchangedError: If the new password equals the current one
        """
        _require(currentPassword=current_password, newPassword=new_password)

        if len(new_password) < self.min_password_length:
            raise PasswordTooShortError(self.min_password_length)

        record = self.users.get_by_id(caller.id)
        if record is None:
            raise UserNotFoundError(caller.id)

        if not self.hasher.verify(current_password, record["password_hash"]):
            logger.warning(f"Incorrect current password for user: {caller.id}")
            raise IncorrectPasswordError()

        if new_password == current_password:
            raise PasswordUnchangedError()

        self.users.update_password(caller.id, self.hasher.hash(new_password))
        logger.info(f"Changed password for user: {caller.id}")
