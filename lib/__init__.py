# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable infrastructure:
# - supabase_client.py: Singleton Supabase client wrapper
# - repositories/: Storage interfaces and their Supabase / in-memory backends
# - utils.py: Shared utilities (UUID parsing, UTC time)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid, utcnow

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "parse_uuid",
    "utcnow",
]
