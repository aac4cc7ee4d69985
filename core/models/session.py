# =============================================================================
# core/models/session.py - Session Schemas
# =============================================================================
# These models define the API contract for wellness session operations:
# - SessionStatus: Enum for the two lifecycle states
# - SessionCreate: Input for creating a new session
# - SessionUpdate: Partial input for editing / publishing a session
# - SessionResponse: Output when returning session data to clients
# - LikeResponse: Output of the like toggle
#
# Stored records use snake_case columns (image_url, liked_by, created_at).
# Clients see imageUrl, likedBy, createdAt and updatedAt.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .user import UserPublic


class SessionStatus(str, Enum):
    """
    Possible states for a wellness session.

    - draft: Only visible in the owner's own list
    - published: Visible to every authenticated user

    Flow: draft <-> published (any number of times)
    """
    DRAFT = "draft"
    PUBLISHED = "published"


# Columns that may be cleared with an explicit null on update
NULLABLE_FIELDS = frozenset({"title", "youtube_url"})


class SessionCreate(BaseModel):
    """
    Schema for creating a new session.

    Every field is optional; the store fills in defaults. likes and likedBy
    are not accepted here, a new session always starts with no likes.

    Example:
        {
            "title": "Morning Yoga",
            "youtube_url": "https://youtu.be/abc",
            "tags": ["yoga", "morning"],
            "status": "draft"
        }
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str | None = Field(
        default=None,
        description="Session title"
    )

    description: str = Field(
        default="",
        description="Free-text description"
    )

    youtube_url: str | None = Field(
        default=None,
        description="Link to the session video"
    )

    tags: list[str] = Field(
        default_factory=list,
        description="Free-text tags, in display order"
    )

    status: SessionStatus = Field(
        default=SessionStatus.DRAFT,
        description="Initial lifecycle status"
    )

    image_url: str = Field(
        default="",
        validation_alias=AliasChoices("imageUrl", "image_url"),
        description="Link to a cover image"
    )

    @field_validator("title", "youtube_url")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if isinstance(value, str) else value

    def to_record(self) -> dict[str, Any]:
        """Storage columns for a new session (owner is added by the service)."""
        return self.model_dump(mode="json")


class SessionUpdate(BaseModel):
    """
    Schema for updating a session.

    Only the fields the client sends are applied. Publishing and
    unpublishing are plain updates of `status`.

    Example:
        {"status": "published"}
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str | None = None
    description: str | None = None
    youtube_url: str | None = None
    tags: list[str] | None = None
    status: SessionStatus | None = None
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "image_url"),
    )

    @field_validator("title", "youtube_url")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if isinstance(value, str) else value

    def to_changes(self) -> dict[str, Any]:
        """
        Storage columns to change.

        Fields the client did not send are left alone. An explicit null is
        only honoured for nullable columns.
        """
        changes = self.model_dump(mode="json", exclude_unset=True)
        return {
            field: value
            for field, value in changes.items()
            if value is not None or field in NULLABLE_FIELDS
        }


class SessionResponse(BaseModel):
    """
    Schema for returning session data to clients.

    Returned by every /api/session endpoint that yields a session.
    `user_id` carries the owner's public profile rather than the bare ID.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "user_id": {"id": "...", "name": "A", "email": "a@x.com"},
            "title": "Yoga",
            "description": "",
            "youtube_url": "https://youtu.be/abc",
            "tags": [],
            "status": "draft",
            "imageUrl": "",
            "likes": 0,
            "likedBy": [],
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique session identifier")

    user_id: UserPublic | None = Field(
        default=None,
        description="Owner's public profile (null if the owner no longer exists)"
    )

    title: str | None = None
    description: str = ""
    youtube_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.DRAFT

    image_url: str = Field(default="", alias="imageUrl")

    likes: int = Field(default=0, ge=0)

    liked_by: list[str] = Field(
        default_factory=list,
        alias="likedBy",
        description="IDs of users who liked this session"
    )

    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        owner: UserPublic | dict[str, Any] | None,
    ) -> "SessionResponse":
        """Build a response from a stored record and its owner's public view."""
        return cls(
            id=str(record["id"]),
            user_id=owner,
            title=record.get("title"),
            description=record.get("description") or "",
            youtube_url=record.get("youtube_url"),
            tags=record.get("tags") or [],
            status=record.get("status") or SessionStatus.DRAFT,
            image_url=record.get("image_url") or "",
            likes=record.get("likes") or 0,
            liked_by=[str(user_id) for user_id in record.get("liked_by") or []],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )


class LikeResponse(BaseModel):
    """Result of toggling a like."""
    message: str = Field(..., examples=["Session liked successfully."])
    session: SessionResponse
