# =============================================================================
# lib/admin_client.py - Admin API Client & Optimistic Reorder Controller
# =============================================================================
# Client side of the admin panel's drag-to-reorder:
# - AdminApiClient: async httpx wrapper for the /admin endpoints
# - ReorderController: applies a drag optimistically, saves it, and rolls
#   back to the last confirmed order when saving fails
#
# Usage:
#   async with AdminApiClient("https://api.example.com/api/v1", token=jwt) as api:
#       items = await api.list_items("projects")
#       controller = ReorderController(
#           [item["id"] for item in items],
#           submit=api.reorder_submitter("projects"),
#           on_notice=print,
#       )
#       await controller.drag(source=2, destination=0)
# =============================================================================

import logging
from typing import Any, Awaitable, Callable, Iterable

import httpx

from core.reorder_state import (
    DragCompleted,
    Failed,
    Loaded,
    NoticeDismissed,
    Pending,
    ReorderEvent,
    ReorderFailed,
    ReorderState,
    ReorderSucceeded,
    Stable,
    reduce,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("projects", "team")
REORDER_FAILED_NOTICE = "Failed to save order"


class AdminApiError(Exception):
    """Non-2xx answer from the admin API."""

    def __init__(self, status_code: int, detail: str, code: str | None = None):
        super().__init__(f"[{status_code}] {detail}")
        self.status_code = status_code
        self.detail = detail
        self.code = code


class AdminApiClient:
    """
    Async client for the admin endpoints.

    Sends the Supabase session token as a Bearer header. A custom httpx
    transport can be passed for testing.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection} (expected one of {COLLECTIONS})")

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        raise AdminApiError(
            status_code=response.status_code,
            detail=body.get("detail", response.reason_phrase),
            code=body.get("code"),
        )

    async def list_items(self, collection: str) -> list[dict[str, Any]]:
        """Fetch a collection in display order."""
        self._check_collection(collection)
        response = await self._client.get(f"/admin/{collection}")
        self._raise_for_status(response)
        return response.json()

    async def reorder(self, collection: str, ids: list[str]) -> None:
        """
        Save a new display order.

        Raises:
            AdminApiError: If the API rejects the request
            httpx.HTTPError: On network failure
        """
        self._check_collection(collection)
        response = await self._client.put(f"/admin/{collection}/reorder", json={"ids": ids})
        self._raise_for_status(response)

    def reorder_submitter(self, collection: str) -> Callable[[list[str]], Awaitable[None]]:
        """Bind `reorder` to one collection, for ReorderController."""
        self._check_collection(collection)

        async def submit(ids: list[str]) -> None:
            await self.reorder(collection, ids)

        return submit


class ReorderController:
    """
    Drives the reorder state machine for one admin list.

    Each drag is shown immediately, then saved through `submit`. A failed
    save restores the last confirmed order and reports a notice. Drags
    made while a save is in flight are not merged; each one is saved and
    the newest answer wins.
    """

    def __init__(
        self,
        order: Iterable[str],
        submit: Callable[[list[str]], Awaitable[None]],
        on_notice: Callable[[str], None] | None = None,
    ):
        self._state: ReorderState = Stable(order=tuple(order))
        self._submit = submit
        self._on_notice = on_notice

    @property
    def state(self) -> ReorderState:
        return self._state

    @property
    def order(self) -> list[str]:
        """The order currently shown."""
        return list(self._state.order)

    def dispatch(self, event: ReorderEvent) -> ReorderState:
        self._state = reduce(self._state, event)
        return self._state

    def load(self, order: Iterable[str]) -> ReorderState:
        return self.dispatch(Loaded(order=tuple(order)))

    def dismiss_notice(self) -> ReorderState:
        return self.dispatch(NoticeDismissed())

    async def drag(self, source: int, destination: int) -> ReorderState:
        """
        Apply a drag optimistically and save it.

        Returns:
            The state once this drag's save has been answered
        """
        previous = self._state
        state = self.dispatch(DragCompleted(source=source, destination=destination))
        if state is previous or not isinstance(state, Pending):
            return state

        request_id = state.last_request_id
        ids = list(state.order)

        # submit is injected, so any error it raises counts as a failed save
        try:
            await self._submit(ids)
        except Exception as e:
            logger.warning(f"Reorder request {request_id} failed: {e}")
            state = self.dispatch(ReorderFailed(request_id=request_id, error=str(e) or type(e).__name__))
            if (
                isinstance(state, Failed)
                and state.last_request_id == request_id
                and self._on_notice is not None
            ):
                self._on_notice(REORDER_FAILED_NOTICE)
            return state

        return self.dispatch(ReorderSucceeded(request_id=request_id))
