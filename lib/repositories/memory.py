# =============================================================================
# lib/repositories/memory.py - In-Memory Repositories
# =============================================================================
# Process-local implementations of the repository interfaces.
# Used by the test suite and by STORAGE_BACKEND=memory for local runs.
#
# Every read-modify-write happens under the repository lock, which gives
# toggle_like the same all-or-nothing behaviour as the database function.
# Records are copied on the way in and out so callers never share state
# with the store.
# =============================================================================

import copy
import logging
from itertools import count
from threading import Lock
from typing import Any
from uuid import uuid4

from lib.repositories.base import DuplicateRecordError, SessionRepository, UserRepository
from lib.utils import utcnow

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    """Credential store backed by a dict."""

    def __init__(self):
        self._lock = Lock()
        self._users: dict[str, dict[str, Any]] = {}
        self._ids_by_email: dict[str, str] = {}

    def ping(self) -> None:
        return None

    def get_by_id(self, user_id: str) -> dict[str, Any] | None:
        with self._lock:
            user = self._users.get(user_id)
            return copy.deepcopy(user) if user else None

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        with self._lock:
            user_id = self._ids_by_email.get(email)
            return copy.deepcopy(self._users[user_id]) if user_id else None

    def get_public_many(self, user_ids: list[str]) -> dict[str, dict[str, Any]]:
        with self._lock:
            return {
                user_id: {
                    "id": user_id,
                    "name": self._users[user_id]["name"],
                    "email": self._users[user_id]["email"],
                }
                for user_id in set(user_ids)
                if user_id in self._users
            }

    def create(self, email: str, name: str, password_hash: str) -> dict[str, Any]:
        with self._lock:
            if email in self._ids_by_email:
                raise DuplicateRecordError("email", email)

            now = utcnow()
            user = {
                "id": str(uuid4()),
                "email": email,
                "name": name,
                "password_hash": password_hash,
                "created_at": now,
                "updated_at": now,
            }
            self._users[user["id"]] = user
            self._ids_by_email[email] = user["id"]
            return copy.deepcopy(user)

    def update_password(self, user_id: str, password_hash: str) -> dict[str, Any] | None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user["password_hash"] = password_hash
            user["updated_at"] = max(utcnow(), user["updated_at"])
            return copy.deepcopy(user)

    def close(self) -> None:
        with self._lock:
            self._users.clear()
            self._ids_by_email.clear()


class InMemorySessionRepository(SessionRepository):
    """Wellness session store backed by a dict."""

    def __init__(self):
        self._lock = Lock()
        self._sessions: dict[str, dict[str, Any]] = {}
        # Insertion order breaks ties between equal created_at values
        self._sequence = count()
        self._order: dict[str, int] = {}

    def ping(self) -> None:
        return None

    def _newest_first(self, sessions: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [
            copy.deepcopy(s)
            for s in sorted(
                sessions,
                key=lambda s: (s["created_at"], self._order[s["id"]]),
                reverse=True,
            )
        ]

    @staticmethod
    def _matches(session: dict[str, Any], term: str) -> bool:
        needle = term.lower()
        if needle in (session.get("title") or "").lower():
            return True
        return any(needle in tag.lower() for tag in session.get("tags") or [])

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            now = utcnow()
            session = {
                "id": str(uuid4()),
                "title": None,
                "description": "",
                "youtube_url": None,
                "tags": [],
                "status": "draft",
                "image_url": "",
                **copy.deepcopy(data),
                "likes": 0,
                "liked_by": [],
                "created_at": now,
                "updated_at": now,
            }
            self._sessions[session["id"]] = session
            self._order[session["id"]] = next(self._sequence)
            return copy.deepcopy(session)

    def get(self, session_id: str) -> dict[str, Any] | None:
        with self._lock:
            session = self._sessions.get(session_id)
            return copy.deepcopy(session) if session else None

    def list_published(self, search: str | None = None) -> list[dict[str, Any]]:
        with self._lock:
            published = [s for s in self._sessions.values() if s["status"] == "published"]
            if search:
                published = [s for s in published if self._matches(s, search)]
            return self._newest_first(published)

    def list_by_owner(self, user_id: str) -> list[dict[str, Any]]:
        with self._lock:
            return self._newest_first(
                [s for s in self._sessions.values() if s["user_id"] == user_id]
            )

    def update_owned(
        self,
        session_id: str,
        owner_id: str,
        changes: dict[str, Any],
    ) -> dict[str, Any] | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session["user_id"] != owner_id:
                return None
            session.update(copy.deepcopy(changes))
            session["updated_at"] = max(utcnow(), session["updated_at"])
            return copy.deepcopy(session)

    def delete_owned(self, session_id: str, owner_id: str) -> bool:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session["user_id"] != owner_id:
                return False
            del self._sessions[session_id]
            del self._order[session_id]
            return True

    def toggle_like(self, session_id: str, user_id: str) -> tuple[dict[str, Any], bool] | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None

            if user_id in session["liked_by"]:
                session["liked_by"].remove(user_id)
                session["likes"] -= 1
                liked = False
            else:
                session["liked_by"].append(user_id)
                session["likes"] += 1
                liked = True

            session["updated_at"] = max(utcnow(), session["updated_at"])
            return copy.deepcopy(session), liked

    def close(self) -> None:
        with self._lock:
            self._sessions.clear()
            self._order.clear()
