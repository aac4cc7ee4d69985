# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up the test environment before any imports
# - Fresh in-memory repositories for every test
# - A TestClient wired to those repositories through dependency overrides
# - Registered users with ready-made auth headers
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from core.models.user import AuthUser
from core.services import AuthService, PasswordHasher, SessionService, TokenService
from lib.repositories import InMemorySessionRepository, InMemoryUserRepository


# =============================================================================
# Repositories & Services
# =============================================================================

@pytest.fixture
def user_repository():
    """Empty in-memory credential store."""
    return InMemoryUserRepository()


@pytest.fixture
def session_repository():
    """Empty in-memory session store."""
    return InMemorySessionRepository()


@pytest.fixture
def token_service():
    """Token service signing with the test secret."""
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


@pytest.fixture
def password_hasher():
    """bcrypt at the lowest cost factor to keep tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def auth_service(user_repository, token_service, password_hasher):
    return AuthService(
        users=user_repository,
        tokens=token_service,
        hasher=password_hasher,
        min_password_length=4,
    )


@pytest.fixture
def session_service(session_repository, user_repository):
    return SessionService(sessions=session_repository, users=user_repository)


@pytest.fixture
def alice(auth_service) -> AuthUser:
    """Registered user A as an authenticated caller."""
    response = auth_service.register("a@x.com", "A", "pass1234")
    return AuthUser(**response.user.model_dump())


@pytest.fixture
def bob(auth_service) -> AuthUser:
    """Registered user B as an authenticated caller."""
    response = auth_service.register("b@x.com", "B", "pass5678")
    return AuthUser(**response.user.model_dump())


# =============================================================================
# API Client
# =============================================================================

@pytest.fixture
def client(user_repository, session_repository):
    """TestClient whose repositories are the per-test in-memory stores."""
    from app.dependencies import get_session_repository, get_user_repository
    from app.main import app

    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_session_repository] = lambda: session_repository

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """
    Register a user through the API.

    Returns a function (email, name, password) -> (user dict, auth headers).
    """
    def _register(email: str, name: str, password: str = "pass1234"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "name": name, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register
