# =============================================================================
# tests/test_supabase_repositories.py - Supabase Repository Tests
# =============================================================================
# Tests for the PostgREST-backed repositories with a mocked Supabase client.
# No network calls are made; each test checks the query that would be sent
# and how the response is mapped back.
#
# Run with: pytest tests/test_supabase_repositories.py -v
# =============================================================================

from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from lib.repositories import (
    DuplicateRecordError,
    SupabaseSessionRepository,
    SupabaseUserRepository,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError


def _response(data):
    """Shape of a postgrest APIResponse as the repositories use it."""
    return MagicMock(data=data)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def users(client):
    return SupabaseUserRepository(client_factory=lambda: client)


@pytest.fixture
def sessions(client):
    return SupabaseSessionRepository(client_factory=lambda: client)


# =============================================================================
# Client Helper Tests
# =============================================================================

class TestUniqueViolation:
    """Tests for SupabaseClient.is_unique_violation."""

    def test_postgrest_error_code(self):
        error = APIError({"code": "23505", "message": "duplicate key value"})

        assert SupabaseClient.is_unique_violation(error)

    def test_other_error(self):
        error = APIError({"code": "42501", "message": "permission denied"})

        assert not SupabaseClient.is_unique_violation(error)
        assert not SupabaseClient.is_unique_violation(RuntimeError("boom"))


# =============================================================================
# User Repository Tests
# =============================================================================

class TestSupabaseUserRepository:
    """Tests for SupabaseUserRepository."""

    def test_get_by_email(self, users, client):
        row = {"id": "u1", "email": "a@x.com", "name": "A", "password_hash": "h"}
        query = client.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.return_value = _response([row])

        assert users.get_by_email("a@x.com") == row
        client.table.assert_called_with("users")
        query.eq.assert_called_with("email", "a@x.com")

    def test_get_by_id_missing(self, users, client):
        query = client.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.return_value = _response([])

        assert users.get_by_id("u1") is None

    def test_fetch_failure(self, users, client):
        query = client.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.side_effect = RuntimeError("down")

        with pytest.raises(SupabaseClientError) as exc_info:
            users.get_by_id("u1")

        assert exc_info.value.code == "FETCH_USER_FAILED"

    def test_public_many(self, users, client):
        rows = [{"id": "u1", "name": "A", "email": "a@x.com"}]
        query = client.table.return_value.select.return_value
        query.in_.return_value.execute.return_value = _response(rows)

        assert users.get_public_many(["u1", "u1"]) == {"u1": rows[0]}
        client.table.return_value.select.assert_called_with("id, name, email")
        query.in_.assert_called_with("id", ["u1"])

    def test_public_many_empty_skips_query(self, users, client):
        assert users.get_public_many([]) == {}
        client.table.assert_not_called()

    def test_create(self, users, client):
        row = {"id": "u1", "email": "a@x.com", "name": "A", "password_hash": "h"}
        client.table.return_value.insert.return_value.execute.return_value = _response([row])

        assert users.create("a@x.com", "A", "h") == row
        client.table.return_value.insert.assert_called_with(
            {"email": "a@x.com", "name": "A", "password_hash": "h"}
        )

    def test_create_duplicate(self, users, client):
        """Test that a unique violation becomes DuplicateRecordError."""
        client.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value violates unique constraint"}
        )

        with pytest.raises(DuplicateRecordError):
            users.create("a@x.com", "A", "h")

    def test_create_other_failure(self, users, client):
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("down")

        with pytest.raises(SupabaseClientError) as exc_info:
            users.create("a@x.com", "A", "h")

        assert exc_info.value.code == "INSERT_USER_FAILED"

    def test_update_password(self, users, client):
        query = client.table.return_value.update.return_value
        query.eq.return_value.execute.return_value = _response([{"id": "u1"}])

        assert users.update_password("u1", "new") == {"id": "u1"}
        client.table.return_value.update.assert_called_with({"password_hash": "new"})
        query.eq.assert_called_with("id", "u1")


# =============================================================================
# Session Repository Tests
# =============================================================================

class TestSupabaseSessionRepository:
    """Tests for SupabaseSessionRepository."""

    def test_insert(self, sessions, client):
        row = {"id": "s1", "user_id": "u1", "title": "Yoga"}
        client.table.return_value.insert.return_value.execute.return_value = _response([row])

        assert sessions.insert({"user_id": "u1", "title": "Yoga"}) == row
        client.table.assert_called_with("sessions")

    def test_insert_failure(self, sessions, client):
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("down")

        with pytest.raises(SupabaseClientError) as exc_info:
            sessions.insert({"user_id": "u1"})

        assert exc_info.value.code == "INSERT_SESSION_FAILED"

    def test_list_published_without_search(self, sessions, client):
        rows = [{"id": "s1"}]
        query = client.table.return_value.select.return_value.eq.return_value
        query.order.return_value.execute.return_value = _response(rows)

        assert sessions.list_published() == rows
        client.table.return_value.select.return_value.eq.assert_called_with("status", "published")
        query.order.assert_called_with("created_at", desc=True)
        client.rpc.assert_not_called()

    def test_list_published_with_search(self, sessions, client):
        rows = [{"id": "s1"}]
        client.rpc.return_value.execute.return_value = _response(rows)

        assert sessions.list_published("yoga") == rows
        client.rpc.assert_called_with("search_published_sessions", {"term": "yoga"})

    def test_update_owned_filters_by_owner(self, sessions, client):
        query = client.table.return_value.update.return_value
        query.eq.return_value.eq.return_value.execute.return_value = _response([])

        assert sessions.update_owned("s1", "u2", {"title": "x"}) is None
        query.eq.assert_called_with("id", "s1")
        query.eq.return_value.eq.assert_called_with("user_id", "u2")

    def test_delete_owned(self, sessions, client):
        query = client.table.return_value.delete.return_value.eq.return_value.eq.return_value
        query.execute.return_value = _response([{"id": "s1"}])

        assert sessions.delete_owned("s1", "u1") is True

        query.execute.return_value = _response([])
        assert sessions.delete_owned("s1", "u1") is False

    def test_toggle_like(self, sessions, client):
        """Test that the database function's liked flag is split off the row."""
        row = {"id": "s1", "likes": 1, "liked_by": ["u2"], "liked": True}
        client.rpc.return_value.execute.return_value = _response([row])

        session, liked = sessions.toggle_like("s1", "u2")

        assert liked is True
        assert session == {"id": "s1", "likes": 1, "liked_by": ["u2"]}
        client.rpc.assert_called_with(
            "toggle_session_like", {"p_session_id": "s1", "p_user_id": "u2"}
        )

    def test_toggle_like_missing(self, sessions, client):
        client.rpc.return_value.execute.return_value = _response([])

        assert sessions.toggle_like("s1", "u2") is None

    def test_toggle_like_failure(self, sessions, client):
        client.rpc.return_value.execute.side_effect = RuntimeError("down")

        with pytest.raises(SupabaseClientError) as exc_info:
            sessions.toggle_like("s1", "u2")

        assert exc_info.value.code == "TOGGLE_LIKE_FAILED"
