# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - portfolio_client.py: HTTP client for the API with GET dedup
# - utils.py: Shared utilities (error base class, UUID/text helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import ApplicationError, blank_to_none, normalize_uuid, storage_path_from_public_url
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.portfolio_client import PortfolioClient, PortfolioClientError

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # API client
    "PortfolioClient",
    "PortfolioClientError",
    # Utils
    "ApplicationError",
    "blank_to_none",
    "normalize_uuid",
    "storage_path_from_public_url",
]
