# =============================================================================
# core/services/session_service.py - Session Business Logic
# =============================================================================
# Handles wellness session CRUD, publishing and likes.
# Separates HTTP concerns from database/business logic.
#
# Visibility rules:
# - list_published only ever returns published sessions
# - list_mine returns the caller's sessions in both states
# - get_by_id returns any session to any authenticated caller
# - update / delete only match sessions the caller owns; anything else is
#   reported as "not found" so non-owners learn nothing about it
# =============================================================================

import logging
from typing import Any

from app.exceptions import InvalidSessionIdError, SessionNotFoundError
from core.models.session import SessionCreate, SessionResponse, SessionUpdate
from core.models.user import AuthUser
from lib.repositories import SessionRepository, UserRepository
from lib.utils import parse_uuid

logger = logging.getLogger(__name__)

LIKED_MESSAGE = "Session liked successfully."
UNLIKED_MESSAGE = "Session unliked successfully."


class SessionService:
    """
    Service for wellness session operations.

    Every operation takes the authenticated caller explicitly.
    """

    def __init__(self, sessions: SessionRepository, users: UserRepository):
        self.sessions = sessions
        self.users = users

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def _present_many(self, records: list[dict[str, Any]]) -> list[SessionResponse]:
        """Attach each owner's public profile, with one lookup for the whole batch."""
        owners = self.users.get_public_many([str(r["user_id"]) for r in records])
        return [
            SessionResponse.from_record(record, owners.get(str(record["user_id"])))
            for record in records
        ]

    def _present(self, record: dict[str, Any]) -> SessionResponse:
        return self._present_many([record])[0]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_published(
        self,
        caller: AuthUser,
        search: str | None = None,
    ) -> list[SessionResponse]:
        """
        List every published session, newest first.

        Args:
            caller: The authenticated user
            search: Optional case-insensitive substring to match against
                    the title or any tag

        Returns:
            Published sessions
        """
        term = search.strip() if search else None
        records = self.sessions.list_published(term or None)
        logger.debug(f"User {caller.id} listed {len(records)} published sessions (search={term!r})")
        return self._present_many(records)

    def list_mine(self, caller: AuthUser) -> list[SessionResponse]:
        """List the caller's sessions in any status, newest first."""
        return self._present_many(self.sessions.list_by_owner(caller.id))

    def get_by_id(self, caller: AuthUser, session_id: str) -> SessionResponse:
        """
        Get a session by ID, whatever its status or owner.

        Raises:
            InvalidSessionIdError: If session_id is not a UUID
            SessionNotFoundError: If no session has this ID
        """
        parsed = parse_uuid(session_id)
        if parsed is None:
            raise InvalidSessionIdError(session_id)

        record = self.sessions.get(str(parsed))
        if record is None:
            raise SessionNotFoundError(session_id)

        return self._present(record)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, caller: AuthUser, fields: SessionCreate) -> SessionResponse:
        """Create a session owned by the caller."""
        data = fields.to_record()
        data["user_id"] = caller.id

        record = self.sessions.insert(data)
        logger.info(f"Created session: {record['id']} for user: {caller.id}")
        return self._present(record)

    def update(
        self,
        caller: AuthUser,
        session_id: str,
        fields: SessionUpdate,
    ) -> SessionResponse:
        """
        Apply a partial update to one of the caller's sessions.

        Raises:
            InvalidSessionIdError: If session_id is not a UUID
            SessionNotFoundError: If the session doesn't exist or the caller doesn't own it
        """
        parsed = parse_uuid(session_id)
        if parsed is None:
            raise InvalidSessionIdError(session_id)

        changes = fields.to_changes()
        if not changes:
            # Nothing to write, but ownership still decides the outcome
            record = self.sessions.get(str(parsed))
            if record is None or str(record["user_id"]) != caller.id:
                raise SessionNotFoundError(session_id)
            return self._present(record)

        record = self.sessions.update_owned(str(parsed), caller.id, changes)
        if record is None:
            raise SessionNotFoundError(session_id)

        logger.info(f"Updated session: {session_id} ({', '.join(sorted(changes))})")
        return self._present(record)

    def delete(self, caller: AuthUser, session_id: str) -> None:
        """
        Permanently delete one of the caller's sessions.

        Raises:
            SessionNotFoundError: If the session doesn't exist, the caller
                doesn't own it, or session_id is not a UUID
        """
        parsed = parse_uuid(session_id)
        if parsed is None or not self.sessions.delete_owned(str(parsed), caller.id):
            raise SessionNotFoundError(session_id)

        logger.info(f"Deleted session: {session_id}")

    def toggle_like(self, caller: AuthUser, session_id: str) -> tuple[str, SessionResponse]:
        """
        Like the session, or unlike it if the caller already did.

        Returns:
            (status message, updated session)

        Raises:
            SessionNotFoundError: If the session doesn't exist or session_id is not a UUID
        """
        parsed = parse_uuid(session_id)
        result = self.sessions.toggle_like(str(parsed), caller.id) if parsed else None
        if result is None:
            raise SessionNotFoundError(session_id)

        record, liked = result
        logger.info(f"User {caller.id} {'liked' if liked else 'unliked'} session {session_id}")
        return (LIKED_MESSAGE if liked else UNLIKED_MESSAGE), self._present(record)
