# =============================================================================
# app/routers/sessions.py - Wellness Session Endpoints
# =============================================================================
# Handles session browsing, authoring and likes.
# All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter, Path, Query, status

from app.auth.dependencies import CurrentUser
from app.dependencies import SessionServiceDep
from core.models.session import LikeResponse, SessionCreate, SessionResponse, SessionUpdate
from core.models.user import MessageResponse

router = APIRouter()


# =============================================================================
# Queries
# =============================================================================

@router.get("/get-all-sessions", response_model=list[SessionResponse])
def get_all_sessions(
    user: CurrentUser,
    service: SessionServiceDep,
    search: str | None = Query(
        default=None,
        description="Case-insensitive match against title or any tag",
    ),
):
    """
    List every published session, newest first.

    An empty search term lists everything published.
    """
    return service.list_published(user, search)


@router.get("/get-session/{session_id}", response_model=SessionResponse)
def get_session(
    user: CurrentUser,
    service: SessionServiceDep,
    session_id: str = Path(..., description="Session ID (UUID)"),
):
    """
    Get one session by ID, in any status.

    Raises:
        400: If session_id is not a valid UUID
        404: If the session doesn't exist
    """
    return service.get_by_id(user, session_id)


@router.get("/my-sessions", response_model=list[SessionResponse])
def my_sessions(user: CurrentUser, service: SessionServiceDep):
    """List the caller's own sessions, drafts included."""
    return service.list_mine(user)


# =============================================================================
# Mutations
# =============================================================================

@router.post("/create", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    user: CurrentUser,
    service: SessionServiceDep,
    request: SessionCreate | None = None,
):
    """
    Create a new session owned by the caller.

    A new session always starts with no likes; likes and likedBy in the
    body are ignored.
    """
    return service.create(user, request or SessionCreate())


@router.patch("/update/{session_id}", response_model=SessionResponse)
def update_session(
    user: CurrentUser,
    service: SessionServiceDep,
    session_id: str = Path(..., description="Session ID (UUID)"),
    request: SessionUpdate | None = None,
):
    """
    Update one of the caller's sessions. Publish by sending {"status": "published"}.

    Raises:
        400: If session_id is not a valid UUID or the body is invalid
        404: If the session doesn't exist or belongs to someone else
    """
    return service.update(user, session_id, request or SessionUpdate())


@router.delete("/delete/{session_id}", response_model=MessageResponse)
def delete_session(
    user: CurrentUser,
    service: SessionServiceDep,
    session_id: str = Path(..., description="Session ID (UUID)"),
):
    """
    Permanently delete one of the caller's sessions.

    Raises:
        404: If the session doesn't exist or belongs to someone else
    """
    service.delete(user, session_id)
    return MessageResponse(message="Session deleted")


@router.post("/like/{session_id}", response_model=LikeResponse)
def like_session(
    user: CurrentUser,
    service: SessionServiceDep,
    session_id: str = Path(..., description="Session ID (UUID)"),
):
    """
    Like a session, or take the like back if the caller already liked it.

    Raises:
        404: If the session doesn't exist
    """
    message, session = service.toggle_like(user, session_id)
    return LikeResponse(message=message, session=session)
