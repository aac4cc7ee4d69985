# =============================================================================
# lib/repositories/ - Storage Backends
# =============================================================================
# - base.py: UserRepository / SessionRepository interfaces
# - supabase.py: Supabase (PostgREST) implementations
# - memory.py: In-process implementations for tests and local runs
# =============================================================================

from lib.repositories.base import (
    DuplicateRecordError,
    Repository,
    SessionRepository,
    UserRepository,
)
from lib.repositories.memory import InMemorySessionRepository, InMemoryUserRepository
from lib.repositories.supabase import SupabaseSessionRepository, SupabaseUserRepository

__all__ = [
    "DuplicateRecordError",
    "Repository",
    "SessionRepository",
    "UserRepository",
    "InMemorySessionRepository",
    "InMemoryUserRepository",
    "SupabaseSessionRepository",
    "SupabaseUserRepository",
]
