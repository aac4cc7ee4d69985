# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the WellNest API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   wellnest-api
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import settings
from app.dependencies import close_repositories
from app.exceptions import (
    ServerError,
    WellNestException,
    server_exception_handler,
    validation_exception_handler,
    wellnest_exception_handler,
)
from app.routers import health, sessions
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Log the configuration in use
    - Shutdown: Release repositories and the database client
    """
    # Startup
    logger.info(f"Starting WellNest API in {settings.ENVIRONMENT} mode")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    # Shutdown
    logger.info("Shutting down WellNest API")
    close_repositories()


# Create FastAPI application
app = FastAPI(
    title="WellNest API",
    description="""
## Wellness Session Sharing API

Create short wellness sessions (a title, a video link, tags, a cover image),
keep them as drafts, publish them for everyone, and like what others share.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:8000/api/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"email": "a@x.com", "name": "A", "password": "pass1234"}'

# 2. Create a draft
curl -X POST http://localhost:8000/api/session/create \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"title": "Yoga", "youtube_url": "https://youtu.be/abc"}'

# 3. Publish it
curl -X PATCH http://localhost:8000/api/session/update/{id} \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"status": "published"}'
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Register, log in, verify tokens and change passwords",
        },
        {
            "name": "Sessions",
            "description": "Browse, author, publish and like wellness sessions",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(WellNestException)
async def handle_wellnest_exception(request: Request, exc: WellNestException):
    """Handle custom WellNest exceptions."""
    return await wellnest_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_store_error(request: Request, exc: SupabaseClientError):
    """Report store failures as a generic server error."""
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return await wellnest_exception_handler(request, ServerError())


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await server_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Session endpoints
app.include_router(
    sessions.router,
    prefix="/api/session",
    tags=["Sessions"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "WellNest API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development and settings.DEBUG,
    )


if __name__ == "__main__":
    run()
