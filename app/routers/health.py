# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app import __version__
from app.config import settings
from app.dependencies import get_session_repository, get_user_repository
from lib.repositories import Repository, SessionRepository, UserRepository
from lib.utils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual store checks."""
    users: str
    sessions: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _check(name: str, repository: Repository) -> str:
    try:
        repository.ping()
        return "healthy"
    except Exception as e:
        logger.warning(f"Readiness check failed for {name}: {e}")
        return f"unhealthy: {str(e)[:50]}"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=utcnow().isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check(
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    Checks that both stores answer.
    """
    checks = ChecksResponse(
        users=_check("users", users),
        sessions=_check("sessions", sessions),
    )
    all_healthy = checks.users == "healthy" and checks.sessions == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=utcnow().isoformat(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=utcnow().isoformat(),
    )
