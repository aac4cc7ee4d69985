# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - services/: Accounts, tokens and wellness session operations
#
# Services receive their repositories and the authenticated caller as
# arguments. They never read request state.
# =============================================================================
