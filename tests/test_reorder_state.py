# =============================================================================
# tests/test_reorder_state.py - Optimistic Reorder State Machine Tests
# =============================================================================
# Run with: poetry run pytest tests/test_reorder_state.py -v
# =============================================================================

import pytest

from core.reorder_state import (
    DragCompleted,
    Failed,
    Loaded,
    NoticeDismissed,
    Pending,
    ReorderFailed,
    ReorderSucceeded,
    Stable,
    is_saving,
    move_item,
    reduce,
)

ABC = ("a", "b", "c")


class TestMoveItem:

    def test_move_to_front(self):
        assert move_item(ABC, 2, 0) == ("c", "a", "b")

    def test_move_to_back(self):
        assert move_item(ABC, 0, 2) == ("b", "c", "a")

    def test_same_index(self):
        assert move_item(ABC, 1, 1) == ABC

    @pytest.mark.parametrize("source, destination", [(-1, 0), (0, 3), (5, 1)])
    def test_out_of_range(self, source, destination):
        assert move_item(ABC, source, destination) == ABC


class TestReduce:

    def test_drag_is_shown_immediately(self):
        state = reduce(Stable(ABC), DragCompleted(2, 0))

        assert isinstance(state, Pending)
        assert state.order == ("c", "a", "b")
        assert state.last_good == ABC
        assert state.last_request_id == 1
        assert is_saving(state)

    def test_noop_drag_returns_same_state(self):
        stable = Stable(ABC)
        assert reduce(stable, DragCompleted(1, 1)) is stable

    def test_success_settles(self):
        pending = reduce(Stable(ABC), DragCompleted(2, 0))
        state = reduce(pending, ReorderSucceeded(request_id=1))

        assert state == Stable(("c", "a", "b"), last_request_id=1)
        assert not is_saving(state)

    def test_failure_reverts_to_last_good(self):
        pending = reduce(Stable(ABC), DragCompleted(2, 0))
        state = reduce(pending, ReorderFailed(request_id=1, error="boom"))

        assert isinstance(state, Failed)
        assert state.order == ABC
        assert state.error == "boom"

    def test_dismissing_notice(self):
        failed = Failed(ABC, "boom", last_request_id=1)
        assert reduce(failed, NoticeDismissed()) == Stable(ABC, last_request_id=1)

    def test_dismiss_without_notice_is_ignored(self):
        stable = Stable(ABC)
        assert reduce(stable, NoticeDismissed()) is stable

    def test_drag_after_failure_starts_from_reverted_order(self):
        failed = Failed(ABC, "boom", last_request_id=1)
        state = reduce(failed, DragCompleted(0, 1))

        assert state.order == ("b", "a", "c")
        assert state.last_good == ABC
        assert state.last_request_id == 2

    def test_load_replaces_order(self):
        pending = reduce(Stable(ABC), DragCompleted(2, 0))
        state = reduce(pending, Loaded(("x", "y")))

        assert state == Stable(("x", "y"), last_request_id=1)

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            reduce(Stable(ABC), object())


class TestOverlappingSaves:
    """Two drags before the first save answers: the newest request decides."""

    def _two_drags(self):
        state = reduce(Stable(ABC), DragCompleted(2, 0))   # request 1: c a b
        return reduce(state, DragCompleted(2, 0))          # request 2: b c a

    def test_both_in_flight(self):
        state = self._two_drags()

        assert state.order == ("b", "c", "a")
        assert [rid for rid, _ in state.in_flight] == [1, 2]

    def test_stale_success_then_latest_success(self):
        state = reduce(self._two_drags(), ReorderSucceeded(1))

        assert isinstance(state, Pending)
        assert state.order == ("b", "c", "a")
        assert state.last_good == ("c", "a", "b")

        state = reduce(state, ReorderSucceeded(2))
        assert state == Stable(("b", "c", "a"), last_request_id=2)

    def test_stale_success_then_latest_failure(self):
        state = reduce(self._two_drags(), ReorderSucceeded(1))
        state = reduce(state, ReorderFailed(2, "boom"))

        assert isinstance(state, Failed)
        assert state.order == ("c", "a", "b")

    def test_stale_failure_does_not_revert(self):
        state = reduce(self._two_drags(), ReorderFailed(1, "boom"))

        assert isinstance(state, Pending)
        assert state.order == ("b", "c", "a")

        state = reduce(state, ReorderSucceeded(2))
        assert state == Stable(("b", "c", "a"), last_request_id=2)

    def test_latest_answer_first_ignores_older(self):
        state = reduce(self._two_drags(), ReorderSucceeded(2))
        assert isinstance(state, Stable)

        assert reduce(state, ReorderFailed(1, "late")) is state

    def test_latest_failure_then_older_success_shows_confirmed_order(self):
        state = reduce(self._two_drags(), ReorderFailed(2, "boom"))

        assert isinstance(state, Failed)
        assert state.order == ABC
        assert [rid for rid, _ in state.in_flight] == [1]

        state = reduce(state, ReorderSucceeded(1))

        assert isinstance(state, Failed)
        assert state.order == ("c", "a", "b")
        assert state.in_flight == ()

        assert reduce(state, NoticeDismissed()) == Stable(("c", "a", "b"), last_request_id=2)

    def test_older_success_lands_after_notice_dismissed(self):
        state = reduce(self._two_drags(), ReorderFailed(2, "boom"))
        state = reduce(state, NoticeDismissed())

        assert isinstance(state, Stable)
        state = reduce(state, ReorderSucceeded(1))

        assert state == Stable(("c", "a", "b"), last_request_id=2)

    def test_latest_failure_then_older_failure_keeps_reverted_order(self):
        state = reduce(self._two_drags(), ReorderFailed(2, "boom"))
        state = reduce(state, ReorderFailed(1, "boom again"))

        assert state == Failed(ABC, "boom", last_request_id=2)

    def test_drag_after_failure_keeps_older_save_in_flight(self):
        state = reduce(self._two_drags(), ReorderFailed(2, "boom"))
        state = reduce(state, DragCompleted(0, 1))

        assert isinstance(state, Pending)
        assert [rid for rid, _ in state.in_flight] == [1, 3]

    def test_newer_success_supersedes_older_answers(self):
        state = reduce(Stable(ABC), DragCompleted(2, 0))   # 1: c a b
        state = reduce(state, DragCompleted(2, 0))         # 2: b c a
        state = reduce(state, DragCompleted(2, 0))         # 3: a b c
        state = reduce(state, ReorderSucceeded(2))

        assert state.last_good == ("b", "c", "a")
        assert [rid for rid, _ in state.in_flight] == [3]
        assert reduce(state, ReorderSucceeded(1)) is state
