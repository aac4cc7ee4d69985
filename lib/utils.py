# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def parse_uuid(value: str | UUID) -> UUID | None:
    """
    Parse a value as a UUID.

    Returns None instead of raising when the value is not a well-formed UUID,
    so callers decide which error the caller should see.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


# =============================================================================
# Time Utilities
# =============================================================================

def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)
