# =============================================================================
# lib/repositories/base.py - Repository Interfaces
# =============================================================================
# One repository per stored entity. Services depend only on these
# interfaces, so the Supabase implementations can be swapped for the
# in-memory ones in tests or local development.
#
# Records cross this boundary as plain dicts with the storage column names:
#   users:    id, email, name, password_hash, created_at, updated_at
#   sessions: id, user_id, title, description, youtube_url, tags, status,
#             image_url, likes, liked_by, created_at, updated_at
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any


class DuplicateRecordError(Exception):
    """Raised when an insert would violate a uniqueness constraint."""

    def __init__(self, field: str, value: str):
        super().__init__(f"Duplicate value for {field}: {value}")
        self.field = field
        self.value = value


class Repository(ABC):
    """Lifecycle shared by every repository."""

    @abstractmethod
    def ping(self) -> None:
        """
        Check the backing store is reachable.

        Raises whatever the store raises when it is not.
        """

    def close(self) -> None:
        """Release any resources held by the repository."""


class UserRepository(Repository):
    """Credential store."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> dict[str, Any] | None:
        """Fetch a user by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Fetch a user by exact (case-sensitive) email, or None."""

    @abstractmethod
    def get_public_many(self, user_ids: list[str]) -> dict[str, dict[str, Any]]:
        """
        Fetch the public view (id, name, email) of several users.

        Returns a mapping of user ID to public view. Unknown IDs are absent.
        """

    @abstractmethod
    def create(self, email: str, name: str, password_hash: str) -> dict[str, Any]:
        """
        Insert a user.

        Raises:
            DuplicateRecordError: If the email is already registered
        """

    @abstractmethod
    def update_password(self, user_id: str, password_hash: str) -> dict[str, Any] | None:
        """Replace a user's password hash. Returns the updated user, or None."""


class SessionRepository(Repository):
    """Wellness session store."""

    @abstractmethod
    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a session and return the stored record."""

    @abstractmethod
    def get(self, session_id: str) -> dict[str, Any] | None:
        """Fetch a session by ID, or None."""

    @abstractmethod
    def list_published(self, search: str | None = None) -> list[dict[str, Any]]:
        """
        Published sessions, newest first.

        With a search term, keep only sessions whose title or any tag
        contains the term, case-insensitively.
        """

    @abstractmethod
    def list_by_owner(self, user_id: str) -> list[dict[str, Any]]:
        """All sessions owned by a user, newest first."""

    @abstractmethod
    def update_owned(
        self,
        session_id: str,
        owner_id: str,
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Apply changes to a session only if owner_id owns it.

        Returns the updated record, or None when no session matches.
        """

    @abstractmethod
    def delete_owned(self, session_id: str, owner_id: str) -> bool:
        """Delete a session only if owner_id owns it. True if a row was removed."""

    @abstractmethod
    def toggle_like(self, session_id: str, user_id: str) -> tuple[dict[str, Any], bool] | None:
        """
        Atomically flip user_id's membership in liked_by and adjust likes.

        Returns (updated record, liked) where liked is True if the user now
        likes the session, or None if the session does not exist.
        """
