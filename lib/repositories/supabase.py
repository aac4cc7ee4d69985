# =============================================================================
# lib/repositories/supabase.py - Supabase Repositories
# =============================================================================
# Repository implementations on top of the Supabase (PostgREST) client.
#
# Two operations cannot be expressed as a single PostgREST table call and
# are implemented as Postgres functions (see supabase/migrations/):
# - toggle_session_like: row-locked membership flip + counter change
# - search_published_sessions: case-insensitive substring match on
#   title or any tag
#
# Every driver failure is re-raised as SupabaseClientError, except unique
# violations on insert, which become DuplicateRecordError.
# =============================================================================

import logging
from typing import Any

from lib.repositories.base import DuplicateRecordError, SessionRepository, UserRepository
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
SESSIONS_TABLE = "sessions"


class SupabaseUserRepository(UserRepository):
    """Credential store in the public.users table."""

    def __init__(self, client_factory=SupabaseClient.get_client):
        self._client_factory = client_factory

    @property
    def client(self):
        return self._client_factory()

    def ping(self) -> None:
        self.client.table(USERS_TABLE).select("id").limit(1).execute()

    def _fetch_one(self, column: str, value: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("*")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                details={column: value},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    def get_by_id(self, user_id: str) -> dict[str, Any] | None:
        return self._fetch_one("id", user_id)

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        return self._fetch_one("email", email)

    def get_public_many(self, user_ids: list[str]) -> dict[str, dict[str, Any]]:
        unique_ids = sorted(set(user_ids))
        if not unique_ids:
            return {}

        try:
            response = (
                self.client.table(USERS_TABLE)
                .select("id, name, email")
                .in_("id", unique_ids)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch users: {e}",
                code="FETCH_USERS_FAILED",
                details={"user_ids": unique_ids},
            ) from e

        return {str(row["id"]): row for row in response.data or []}

    def create(self, email: str, name: str, password_hash: str) -> dict[str, Any]:
        data = {"email": email, "name": name, "password_hash": password_hash}

        try:
            response = self.client.table(USERS_TABLE).insert(data).execute()
        except Exception as e:
            if SupabaseClient.is_unique_violation(e):
                raise DuplicateRecordError("email", email) from e
            raise SupabaseClientError(
                message=f"Failed to create user: {e}",
                code="INSERT_USER_FAILED",
            ) from e

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")

        user = response.data[0]
        logger.info(f"Inserted user: {user['id']}")
        return user

    def update_password(self, user_id: str, password_hash: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(USERS_TABLE)
                .update({"password_hash": password_hash})
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update password: {e}",
                code="UPDATE_USER_FAILED",
                details={"user_id": user_id},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None


class SupabaseSessionRepository(SessionRepository):
    """Wellness session store in the public.sessions table."""

    def __init__(self, client_factory=SupabaseClient.get_client):
        self._client_factory = client_factory

    @property
    def client(self):
        return self._client_factory()

    def ping(self) -> None:
        self.client.table(SESSIONS_TABLE).select("id").limit(1).execute()

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self.client.table(SESSIONS_TABLE).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create session: {e}",
                code="INSERT_SESSION_FAILED",
                details={"user_id": data.get("user_id")},
            ) from e

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")
        return response.data[0]

    def get(self, session_id: str) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(SESSIONS_TABLE)
                .select("*")
                .eq("id", session_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch session: {e}",
                code="FETCH_SESSION_FAILED",
                suggestion="Check that the session_id exists",
                details={"session_id": session_id},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    def list_published(self, search: str | None = None) -> list[dict[str, Any]]:
        try:
            if search:
                response = self.client.rpc(
                    "search_published_sessions", {"term": search}
                ).execute()
            else:
                response = (
                    self.client.table(SESSIONS_TABLE)
                    .select("*")
                    .eq("status", "published")
                    .order("created_at", desc=True)
                    .execute()
                )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list published sessions: {e}",
                code="LIST_SESSIONS_FAILED",
                details={"search": search},
            ) from e

        return response.data or []

    def list_by_owner(self, user_id: str) -> list[dict[str, Any]]:
        try:
            response = (
                self.client.table(SESSIONS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list sessions: {e}",
                code="LIST_SESSIONS_FAILED",
                details={"user_id": user_id},
            ) from e

        return response.data or []

    def update_owned(
        self,
        session_id: str,
        owner_id: str,
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        try:
            response = (
                self.client.table(SESSIONS_TABLE)
                .update(changes)
                .eq("id", session_id)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update session: {e}",
                code="UPDATE_SESSION_FAILED",
                details={"session_id": session_id},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    def delete_owned(self, session_id: str, owner_id: str) -> bool:
        try:
            response = (
                self.client.table(SESSIONS_TABLE)
                .delete()
                .eq("id", session_id)
                .eq("user_id", owner_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete session: {e}",
                code="DELETE_SESSION_FAILED",
                details={"session_id": session_id},
            ) from e

        return bool(response.data)

    def toggle_like(self, session_id: str, user_id: str) -> tuple[dict[str, Any], bool] | None:
        try:
            response = self.client.rpc(
                "toggle_session_like",
                {"p_session_id": session_id, "p_user_id": user_id},
            ).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to toggle like: {e}",
                code="TOGGLE_LIKE_FAILED",
                details={"session_id": session_id, "user_id": user_id},
            ) from e

        rows = response.data or []
        if not rows:
            return None

        session = dict(rows[0])
        liked = bool(session.pop("liked"))
        return session, liked
