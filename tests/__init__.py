# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the WellNest API:
# - test_config.py: settings validation
# - test_models.py: Pydantic model validation and serialization
# - test_token_service.py / test_auth_service.py: accounts and tokens
# - test_session_service.py: session rules against in-memory stores
# - test_memory_repositories.py / test_supabase_repositories.py: storage
# - test_auth_api.py / test_sessions_api.py / test_health.py: HTTP layer
#
# Run tests with: pytest
# =============================================================================
