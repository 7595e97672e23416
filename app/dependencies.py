# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.cache_service import PageCache, page_cache


def get_page_cache() -> PageCache:
    """
    Get the public page cache.

    Returns the process-wide cache that mutations revalidate.
    """
    return page_cache


def public_cache_headers() -> dict[str, str]:
    """
    Cache-Control for public lists: CDNs may serve them for the cache
    window and keep serving the stale copy while refreshing.
    """
    return {
        "Cache-Control": (
            f"public, max-age=0, s-maxage={settings.PUBLIC_CACHE_TTL_SECONDS}, "
            "stale-while-revalidate"
        )
    }


# Type alias for dependency injection
PageCacheDep = Annotated[PageCache, Depends(get_page_cache)]
