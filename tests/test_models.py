# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the API models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Models serialize with the field names clients expect
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    AuthUser,
    LikeResponse,
    SessionCreate,
    SessionResponse,
    SessionStatus,
    SessionUpdate,
    UserPublic,
)


# =============================================================================
# Session Create Tests
# =============================================================================

class TestSessionCreate:
    """Tests for SessionCreate model."""

    def test_defaults(self):
        """Test that an empty body yields a blank draft."""
        session = SessionCreate()

        assert session.title is None
        assert session.description == ""
        assert session.youtube_url is None
        assert session.tags == []
        assert session.status == SessionStatus.DRAFT
        assert session.image_url == ""

    def test_accepts_camel_case_image_url(self):
        """Test that clients may send imageUrl."""
        session = SessionCreate.model_validate({"imageUrl": "https://img/1.png"})

        assert session.image_url == "https://img/1.png"

    def test_ignores_likes(self):
        """Test that likes and likedBy in the body are dropped."""
        session = SessionCreate.model_validate(
            {"title": "Yoga", "likes": 5, "likedBy": [str(uuid4())]}
        )
        record = session.to_record()

        assert "likes" not in record
        assert "likedBy" not in record
        assert "liked_by" not in record

    def test_invalid_status(self):
        """Test that status must be draft or published."""
        with pytest.raises(ValidationError):
            SessionCreate(status="archived")

    def test_tags_must_be_a_list(self):
        with pytest.raises(ValidationError):
            SessionCreate.model_validate({"tags": "yoga"})

    def test_title_is_stripped(self):
        session = SessionCreate(title="  Yoga  ")

        assert session.title == "Yoga"

    def test_to_record_uses_storage_columns(self):
        """Test that to_record yields plain JSON values keyed by column."""
        record = SessionCreate(
            title="Yoga",
            youtube_url="https://youtu.be/abc",
            status="published",
            image_url="https://img/1.png",
        ).to_record()

        assert record == {
            "title": "Yoga",
            "description": "",
            "youtube_url": "https://youtu.be/abc",
            "tags": [],
            "status": "published",
            "image_url": "https://img/1.png",
        }


# =============================================================================
# Session Update Tests
# =============================================================================

class TestSessionUpdate:
    """Tests for SessionUpdate model."""

    def test_only_sent_fields_change(self):
        """Test that unset fields are left out of the change set."""
        update = SessionUpdate.model_validate({"status": "published"})

        assert update.to_changes() == {"status": "published"}

    def test_empty_update(self):
        assert SessionUpdate().to_changes() == {}

    def test_null_clears_nullable_columns(self):
        """Test that title and youtube_url may be cleared explicitly."""
        update = SessionUpdate.model_validate({"title": None, "youtube_url": None})

        assert update.to_changes() == {"title": None, "youtube_url": None}

    def test_null_ignored_for_other_columns(self):
        """Test that a null description or tags list is not written."""
        update = SessionUpdate.model_validate({"description": None, "tags": None})

        assert update.to_changes() == {}

    def test_camel_case_image_url(self):
        update = SessionUpdate.model_validate({"imageUrl": "https://img/2.png"})

        assert update.to_changes() == {"image_url": "https://img/2.png"}


# =============================================================================
# Session Response Tests
# =============================================================================

class TestSessionResponse:
    """Tests for SessionResponse model."""

    @pytest.fixture
    def record(self):
        now = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        liker = str(uuid4())
        return {
            "id": str(uuid4()),
            "user_id": str(uuid4()),
            "title": "Yoga",
            "description": "Morning flow",
            "youtube_url": "https://youtu.be/abc",
            "tags": ["yoga"],
            "status": "published",
            "image_url": "https://img/1.png",
            "likes": 1,
            "liked_by": [liker],
            "created_at": now,
            "updated_at": now,
        }

    def test_from_record_with_owner(self, record):
        """Test that the owner's public view replaces the bare ID."""
        owner = {"id": record["user_id"], "name": "A", "email": "a@x.com"}

        session = SessionResponse.from_record(record, owner)

        assert session.user_id == UserPublic(**owner)
        assert session.status == SessionStatus.PUBLISHED
        assert session.likes == 1

    def test_from_record_without_owner(self, record):
        """Test that a missing owner is reported as null."""
        session = SessionResponse.from_record(record, None)

        assert session.user_id is None

    def test_serializes_client_field_names(self, record):
        """Test the JSON shape clients receive."""
        data = SessionResponse.from_record(record, None).model_dump(mode="json", by_alias=True)

        assert set(data) == {
            "id", "user_id", "title", "description", "youtube_url", "tags",
            "status", "imageUrl", "likes", "likedBy", "createdAt", "updatedAt",
        }
        assert data["likedBy"] == record["liked_by"]
        assert data["imageUrl"] == "https://img/1.png"

    def test_like_response_nests_session(self, record):
        response = LikeResponse(
            message="Session liked successfully.",
            session=SessionResponse.from_record(record, None),
        )
        data = response.model_dump(mode="json", by_alias=True)

        assert data["message"] == "Session liked successfully."
        assert data["session"]["likedBy"] == record["liked_by"]


# =============================================================================
# User Model Tests
# =============================================================================

class TestUserModels:
    """Tests for identity models."""

    def test_public_view_drops_password_hash(self):
        """Test that UserPublic never carries the hash."""
        user = UserPublic.from_record(
            {"id": "u1", "name": "A", "email": "a@x.com", "password_hash": "$2b$..."}
        )

        assert user.model_dump() == {"id": "u1", "name": "A", "email": "a@x.com"}

    def test_auth_user_is_immutable(self):
        user = AuthUser(id="u1", name="A", email="a@x.com")

        with pytest.raises(ValidationError):
            user.name = "B"
