# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Repositories are built once per process from settings.STORAGE_BACKEND.
# Tests replace them through app.dependency_overrides.
# =============================================================================

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services import AuthService, PasswordHasher, SessionService, TokenService
from lib.repositories import (
    InMemorySessionRepository,
    InMemoryUserRepository,
    SessionRepository,
    SupabaseSessionRepository,
    SupabaseUserRepository,
    UserRepository,
)
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


# =============================================================================
# Repositories
# =============================================================================

@lru_cache
def get_user_repository() -> UserRepository:
    """Credential store for the configured backend."""
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryUserRepository()
    return SupabaseUserRepository()


@lru_cache
def get_session_repository() -> SessionRepository:
    """Session store for the configured backend."""
    if settings.STORAGE_BACKEND == "memory":
        return InMemorySessionRepository()
    return SupabaseSessionRepository()


def close_repositories() -> None:
    """Release the repositories and the shared database client."""
    if get_user_repository.cache_info().currsize:
        get_user_repository().close()
    if get_session_repository.cache_info().currsize:
        get_session_repository().close()
    get_user_repository.cache_clear()
    get_session_repository.cache_clear()
    SupabaseClient.reset()
    logger.info("Repositories closed")


# =============================================================================
# Services
# =============================================================================

@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(
        users=users,
        tokens=tokens,
        hasher=hasher,
        min_password_length=settings.MIN_PASSWORD_LENGTH,
    )


def get_session_service(
    sessions: SessionRepository = Depends(get_session_repository),
    users: UserRepository = Depends(get_user_repository),
) -> SessionService:
    return SessionService(sessions=sessions, users=users)


# Type aliases for dependency injection
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
