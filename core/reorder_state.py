# =============================================================================
# core/reorder_state.py - Optimistic Reorder State Machine
# =============================================================================
# The admin lists are reordered by drag and drop. The new order is shown
# immediately and saved in the background; if saving fails the list snaps
# back to the last order the server confirmed.
#
# This module is the pure part of that behaviour: a reducer that maps
# (state, event) -> state. Issuing the network call lives in
# lib/admin_client.py (ReorderController).
#
# States:
#   Stable(order)                        - what's shown is what's saved
#   Pending(order, last_good, ...)       - shown optimistically, save in flight
#   Failed(order=last_good, error)       - save failed, reverted, notice shown
#
# Flow:
#   Stable --drag--> Pending --ok--> Stable
#                            --error--> Failed --dismiss--> Stable
# =============================================================================

from dataclasses import dataclass, field, replace

Order = tuple[str, ...]
InFlight = tuple[tuple[int, Order], ...]


# =============================================================================
# States
# =============================================================================
# in_flight holds (request_id, submitted order) for every unanswered save,
# oldest first. Stable and Failed can still have older saves in flight
# after the newest one failed; whichever of those lands is what the server
# holds, so it becomes the shown order.

@dataclass(frozen=True)
class Stable:
    order: Order
    last_request_id: int = 0
    in_flight: InFlight = field(default_factory=tuple)

    @property
    def last_good(self) -> Order:
        return self.order


@dataclass(frozen=True)
class Pending:
    """
    An optimistic order waiting for the server.

    Only the newest save (last_request_id) decides the outcome; older
    answers only move last_good forward.
    """
    order: Order
    last_good: Order
    last_request_id: int
    in_flight: InFlight = field(default_factory=tuple)


@dataclass(frozen=True)
class Failed:
    order: Order
    error: str
    last_request_id: int = 0
    in_flight: InFlight = field(default_factory=tuple)

    @property
    def last_good(self) -> Order:
        return self.order


ReorderState = Stable | Pending | Failed


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class Loaded:
    """Fresh order from the server (page load or refetch)."""
    order: Order


@dataclass(frozen=True)
class DragCompleted:
    """An item was dropped: move it from source to destination index."""
    source: int
    destination: int


@dataclass(frozen=True)
class ReorderSucceeded:
    request_id: int


@dataclass(frozen=True)
class ReorderFailed:
    request_id: int
    error: str


@dataclass(frozen=True)
class NoticeDismissed:
    pass


ReorderEvent = Loaded | DragCompleted | ReorderSucceeded | ReorderFailed | NoticeDismissed


# =============================================================================
# Reducer
# =============================================================================

def move_item(order: Order, source: int, destination: int) -> Order:
    """
    Move the item at `source` to `destination`, shifting the rest.

    Out-of-range indexes return the order unchanged.

    Example:
        move_item(("a", "b", "c"), 2, 0)  # ("c", "a", "b")
    """
    size = len(order)
    if not (0 <= source < size and 0 <= destination < size):
        return order

    items = list(order)
    item = items.pop(source)
    items.insert(destination, item)
    return tuple(items)


def _in_flight_order(state: ReorderState, request_id: int) -> Order | None:
    for rid, order in state.in_flight:
        if rid == request_id:
            return order
    return None


def _without(state: ReorderState, request_id: int) -> InFlight:
    return tuple((rid, order) for rid, order in state.in_flight if rid != request_id)


def _newer_than(state: ReorderState, request_id: int) -> InFlight:
    # Saves older than a confirmed one are superseded; their answers are ignored
    return tuple((rid, order) for rid, order in state.in_flight if rid > request_id)


def reduce(state: ReorderState, event: ReorderEvent) -> ReorderState:
    """
    Compute the next state. Never mutates `state`.

    Events that don't apply (a stale answer, a no-op drag, dismissing when
    there's no notice) return `state` itself.
    """
    if isinstance(event, Loaded):
        return Stable(order=tuple(event.order), last_request_id=state.last_request_id)

    if isinstance(event, DragCompleted):
        new_order = move_item(state.order, event.source, event.destination)
        if new_order == state.order:
            return state

        request_id = state.last_request_id + 1
        return Pending(
            order=new_order,
            last_good=state.last_good,
            last_request_id=request_id,
            in_flight=state.in_flight + ((request_id, new_order),),
        )

    if isinstance(event, ReorderSucceeded):
        confirmed = _in_flight_order(state, event.request_id)
        if confirmed is None:
            return state

        if isinstance(state, Pending):
            if event.request_id == state.last_request_id:
                return Stable(order=state.order, last_request_id=state.last_request_id)

            # An older save landed; the newest one is still in flight
            return Pending(
                order=state.order,
                last_good=confirmed,
                last_request_id=state.last_request_id,
                in_flight=_newer_than(state, event.request_id),
            )

        # The newest save already failed: the server now holds this order
        return replace(state, order=confirmed, in_flight=_newer_than(state, event.request_id))

    if isinstance(event, ReorderFailed):
        if _in_flight_order(state, event.request_id) is None:
            return state

        if isinstance(state, Pending) and event.request_id == state.last_request_id:
            return Failed(
                order=state.last_good,
                error=event.error,
                last_request_id=state.last_request_id,
                in_flight=_without(state, event.request_id),
            )

        return replace(state, in_flight=_without(state, event.request_id))

    if isinstance(event, NoticeDismissed):
        if isinstance(state, Failed):
            return Stable(
                order=state.order,
                last_request_id=state.last_request_id,
                in_flight=state.in_flight,
            )
        return state

    raise TypeError(f"Unknown reorder event: {event!r}")


def is_saving(state: ReorderState) -> bool:
    return isinstance(state, Pending)
