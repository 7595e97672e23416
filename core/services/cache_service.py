# =============================================================================
# core/services/cache_service.py - Public Page Cache & Revalidation
# =============================================================================
# Public list endpoints serve from an in-process cache that expires after
# PUBLIC_CACHE_TTL_SECONDS (24h). Every successful mutation revalidates the
# pages that show the changed entity:
# - drops matching entries from the local cache
# - optionally notifies the frontend (REVALIDATE_WEBHOOK_URL) so it can
#   rebuild its statically cached pages
# =============================================================================

import logging
import time
from typing import Any, Callable, Iterable

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

WEBHOOK_TIMEOUT_SECONDS = 5


class PageCache:
    """
    Path-keyed cache with a fixed time-to-live.

    Example:
        cache = PageCache(ttl_seconds=86400)
        cache.set("/api/v1/projects", payload)
        cache.get("/api/v1/projects")        # payload, until it expires
        cache.invalidate("/api/v1/projects")
    """

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, path: str) -> Any | None:
        entry = self._entries.get(path)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[path]
            return None
        return value

    def set(self, path: str, value: Any) -> None:
        self._entries[path] = (self._clock(), value)

    def invalidate(self, *paths: str) -> None:
        for path in paths:
            self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not None


# Shared by the public routers and the services that revalidate them
page_cache = PageCache(ttl_seconds=settings.PUBLIC_CACHE_TTL_SECONDS)


def _notify_frontend(paths: list[str]) -> None:
    """POST the revalidated paths to the frontend webhook, if configured."""
    if not settings.REVALIDATE_WEBHOOK_URL:
        return

    headers = {}
    if settings.REVALIDATE_SECRET:
        headers["x-revalidate-secret"] = settings.REVALIDATE_SECRET

    try:
        response = httpx.post(
            settings.REVALIDATE_WEBHOOK_URL,
            json={"paths": paths},
            headers=headers,
            timeout=WEBHOOK_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        logger.debug(f"Revalidation webhook accepted {len(paths)} paths")
    except httpx.HTTPError as e:
        # The write already succeeded; pages catch up when their TTL runs out
        logger.warning(f"Revalidation webhook failed for {paths}: {e}")


def revalidate_paths(paths: Iterable[str], cache: PageCache | None = None) -> list[str]:
    """
    Revalidate every page that renders changed data.

    Args:
        paths: Page/API paths, e.g. ["/", "/admin/projects", "/api/v1/projects"]
        cache: Cache to invalidate (defaults to the shared page_cache)

    Returns:
        The de-duplicated list of paths that were revalidated
    """
    unique = list(dict.fromkeys(paths))
    target = cache if cache is not None else page_cache
    target.invalidate(*unique)
    _notify_frontend(unique)
    logger.info(f"Revalidated paths: {', '.join(unique)}")
    return unique
