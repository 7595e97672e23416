# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .cache_service import PageCache, page_cache, revalidate_paths
from .collection_service import OrderedCollectionService, validate_permutation
from .project_service import ProjectService
from .storage_service import StorageService, UploadResult
from .team_service import TeamService

__all__ = [
    "PageCache",
    "page_cache",
    "revalidate_paths",
    "OrderedCollectionService",
    "validate_permutation",
    "ProjectService",
    "StorageService",
    "UploadResult",
    "TeamService",
]
