# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Run with: pytest tests/test_config.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    """Tests for Settings validation and computed properties."""

    def test_supabase_backend_requires_credentials(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                STORAGE_BACKEND="supabase",
                SUPABASE_URL="",
                SUPABASE_SERVICE_KEY="",
            )

    def test_memory_backend_needs_no_credentials(self):
        settings = Settings(
            _env_file=None,
            STORAGE_BACKEND="memory",
            SUPABASE_URL="",
            SUPABASE_SERVICE_KEY="",
        )

        assert settings.STORAGE_BACKEND == "memory"

    def test_short_secret_key_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, STORAGE_BACKEND="memory", SECRET_KEY="short")

    def test_cors_origins_list(self):
        settings = Settings(
            _env_file=None,
            STORAGE_BACKEND="memory",
            CORS_ORIGINS="http://localhost:5173, https://wellnest.app,",
        )

        assert settings.cors_origins_list == ["http://localhost:5173", "https://wellnest.app"]
