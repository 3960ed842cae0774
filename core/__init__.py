# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the portfolio business logic:
# - models/: Pydantic schemas for request validation and responses
# - services/: Ownership rules, profile handling, document upload/removal
#
# Routers call services; services talk to Supabase through lib/.
# Nothing here depends on the request object, so it's testable without HTTP.
# =============================================================================
