# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for ordered-table operations
# - utils.py: Shared utilities (UUID normalization, string-list columns)
# - admin_client.py: Async admin API client and optimistic reorder controller
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import (
    decode_string_list,
    encode_string_list,
    join_string_list,
    normalize_uuid,
)
from lib.admin_client import AdminApiClient, AdminApiError, ReorderController

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "decode_string_list",
    "encode_string_list",
    "join_string_list",
    "normalize_uuid",
    # Admin client
    "AdminApiClient",
    "AdminApiError",
    "ReorderController",
]
