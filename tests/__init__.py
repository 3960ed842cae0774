# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Portfolio CMS API:
# - test_models.py: Pydantic schema validation
# - test_record_service.py: Ownership rules for section and profile services
# - test_document_service.py: Upload, rollback and file removal
# - test_routers.py: HTTP behaviour of the REST endpoints
# - test_auth.py: Token verification and the login callback
# - test_supabase_client.py: Query building in the Supabase wrapper
# - test_portfolio_client.py: Request dedup in the API client
#
# Run tests with: pytest
# =============================================================================
