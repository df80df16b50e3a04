"""
Tests for LifecycleDiffEngine.

Covers:
- Mount / enter / update / leave / re-enter phase rules
- Trail delay accumulation
- Expired transition removal and id allocation
- Duplicate item matching
- Payload construction (producers, composite targets, on_rest wrapping)
"""

import math
from unittest.mock import MagicMock

import pytest

from transition_engine.engine.diff_engine import LifecycleDiffEngine, match_items
from transition_engine.models.enums import Phase
from transition_engine.models.props import TransitionProps


ENTER = {"opacity": 1}
LEAVE = {"opacity": 0}


@pytest.fixture
def scheduler():
    return MagicMock()


@pytest.fixture
def engine(scheduler, controller_factory):
    return LifecycleDiffEngine(scheduler, controller_factory)


def commit(state):
    """Apply phases the way the commit step does"""
    for t, change in state.changes.items():
        t.phase = change.phase
    return state.transitions


def props(**kw):
    kw.setdefault("enter", ENTER)
    kw.setdefault("leave", LEAVE)
    return TransitionProps(**kw)


class TestFirstPass:
    """Items seen for the first time."""

    def test_every_item_gets_a_mounting_transition(self, engine):
        state = engine.compute(["a", "b"], props(), None)

        assert [t.item for t in state.transitions] == ["a", "b"]
        assert all(t.phase == Phase.MOUNT for t in state.transitions)
        assert [c.phase for c in state.changes.values()] == [Phase.ENTER, Phase.ENTER]
        assert state.is_first is True

    def test_ids_come_from_controllers(self, engine, controllers):
        state = engine.compute(["a", "b"], props(), None)

        assert [t.id for t in state.transitions] == [c.id for c in controllers]
        assert len({t.id for t in state.transitions}) == 2

    def test_new_payload_applied_immediately(self, engine, controllers):
        state = engine.compute(["a"], props(from_={"opacity": 0}), None)

        change = state.changes[state.transitions[0]]
        assert change.payload is None
        assert len(controllers[0].updates) == 1
        assert controllers[0].last_payload["to"] == ENTER
        assert controllers[0].animated == {"opacity": 0}

    def test_initial_used_on_first_pass_only(self, engine, controllers):
        initial = {"opacity": 1, "scale": 1}
        p = props(initial=initial)

        prev = commit(engine.compute(["a"], p, None))
        engine.compute(["a", "b"], p, prev)

        assert controllers[0].last_payload["to"] == initial
        assert controllers[1].last_payload["to"] == ENTER

    def test_reset_treats_pass_as_first(self, engine, scheduler):
        prev = commit(engine.compute(["a"], props(), None))
        prev[0].expiration_id = "timer"

        state = engine.compute(["a"], props(reset=True), prev)

        assert state.is_first is True
        assert state.transitions[0] is not prev[0]
        scheduler.cancel.assert_called_once_with(prev[0])

    def test_scalar_data_is_a_singleton(self, engine):
        state = engine.compute("solo", props(), None)
        assert [t.item for t in state.transitions] == ["solo"]

    def test_none_data_is_empty(self, engine):
        state = engine.compute(None, props(), None)
        assert state.transitions == []
        assert state.changes == {}


class TestTrail:
    """Cumulative stagger delay."""

    def test_simultaneous_items_are_staggered(self, engine, controllers):
        engine.compute(["a", "b", "c"], props(trail=100), None)
        assert [c.last_payload["delay"] for c in controllers] == [0, 100, 200]

    def test_delay_advances_only_for_animated_transitions(self, engine, controllers):
        p = props(trail=100)
        prev = commit(engine.compute(["a", "b"], p, None))

        engine.compute(["a", "b", "c"], p, prev)

        assert controllers[2].last_payload["delay"] == 0

    def test_leaving_and_entering_share_the_stagger(self, engine):
        p = props(trail=50)
        prev = commit(engine.compute(["a", "b"], p, None))

        state = engine.compute(["b", "c"], p, prev)
        a, b, c = state.transitions

        # a leaves (deferred payload), b untouched, c mounts (payload applied)
        assert state.changes[a].payload["delay"] == 0
        assert b not in state.changes
        assert c.controller.last_payload["delay"] == 50


class TestPersistingItems:
    """Items present in both passes."""

    def test_no_update_target_means_no_change(self, engine, controllers):
        p = props()
        prev = commit(engine.compute(["a", "b"], p, None))

        state = engine.compute(["a", "b"], p, prev)

        assert state.changes == {}
        assert state.transitions == prev
        assert all(len(c.updates) == 1 for c in controllers)

    def test_unchanged_collection_is_idempotent(self, engine):
        p = props()
        prev = commit(engine.compute(["a", "b"], p, None))
        ids = [t.id for t in prev]

        first = engine.compute(["a", "b"], p, prev)
        second = engine.compute(["a", "b"], p, first.transitions)

        assert first.changes == {} and second.changes == {}
        assert [t.id for t in second.transitions] == ids

    def test_update_target_produces_update_change(self, engine):
        p = props(update={"opacity": 0.5})
        prev = commit(engine.compute(["a"], p, None))

        state = engine.compute(["a"], p, prev)

        change = state.changes[prev[0]]
        assert change.phase == Phase.UPDATE
        assert change.payload["to"] == {"opacity": 0.5}
        assert change.payload["from"] is None


class TestLeaving:
    """Items removed from the collection."""

    def test_removed_item_leaves_with_deferred_payload(self, engine, controllers):
        p = props(from_={"opacity": 0})
        prev = commit(engine.compute(["a"], p, None))

        state = engine.compute([], p, prev)

        change = state.changes[prev[0]]
        assert change.phase == Phase.LEAVE
        assert change.payload["to"] == LEAVE
        assert change.payload["from"] is None
        assert len(controllers[0].updates) == 1
        assert len(state.transitions) == 1

    def test_leave_happens_exactly_once(self, engine):
        p = props()
        prev = commit(engine.compute(["a"], p, None))
        prev = commit(engine.compute([], p, prev))

        state = engine.compute([], p, prev)

        assert state.changes == {}
        assert prev[0].phase == Phase.LEAVE

    def test_reappearing_item_re_enters_same_transition(self, engine):
        p = props(from_={"opacity": 0})
        prev = commit(engine.compute(["a"], p, None))
        prev = commit(engine.compute([], p, prev))

        state = engine.compute(["a"], p, prev)

        assert state.transitions == prev
        change = state.changes[prev[0]]
        assert change.phase == Phase.ENTER
        assert change.payload["to"] == ENTER
        assert change.payload["from"] == {"opacity": 0}

    def test_expired_transition_is_dropped(self, engine, scheduler):
        p = props()
        prev = commit(engine.compute(["a"], p, None))
        prev = commit(engine.compute([], p, prev))
        prev[0].expires_by = 10.0
        prev[0].expiration_id = "timer"

        state = engine.compute([], p, prev)

        assert state.transitions == []
        scheduler.cancel.assert_called_once_with(prev[0])

    def test_equal_item_after_expiry_gets_new_id(self, engine):
        p = props()
        prev = commit(engine.compute(["a"], p, None))
        old_id = prev[0].id
        prev = commit(engine.compute([], p, prev))
        prev[0].expires_by = 0.0

        state = engine.compute(["a"], p, prev)

        assert len(state.transitions) == 1
        assert state.transitions[0].id != old_id
        assert state.transitions[0].phase == Phase.MOUNT


class TestDuplicates:
    """Equal items pair with transitions by discovery order."""

    def test_match_items_consumes_first_match(self, engine):
        prev = commit(engine.compute(["a", "b", "a"], props(), None))

        present, new_items = match_items(prev, ["a", "c", "a", "a"])

        assert present == {t.id for t in prev if t.item == "a"}
        assert new_items == ["c", "a"]

    def test_dropping_one_duplicate_leaves_the_last(self, engine):
        p = props()
        prev = commit(engine.compute(["a", "a"], p, None))

        state = engine.compute(["a"], p, prev)

        assert prev[0] not in state.changes
        assert state.changes[prev[1]].phase == Phase.LEAVE

    def test_extra_duplicate_is_new(self, engine):
        p = props()
        prev = commit(engine.compute(["a", "a"], p, None))

        state = engine.compute(["a", "a", "a"], p, prev)

        assert len(state.transitions) == 3
        assert state.transitions[2].phase == Phase.MOUNT


class TestPayload:
    """Payload construction."""

    def test_producers_called_with_item_and_index(self, engine, controllers):
        p = props(
            enter=lambda item, i: {"x": i * 10},
            from_=lambda item, i: {"x": -1},
            config=lambda item, i: {"duration_ms": 100 + i},
        )

        engine.compute(["a", "b"], p, None)

        assert controllers[1].last_payload["to"] == {"x": 10}
        assert controllers[1].last_payload["from"] == {"x": -1}
        assert controllers[1].last_payload["config"] == {"duration_ms": 101}

    def test_composite_target_is_split(self, engine, controllers):
        on_rest = MagicMock()
        p = props(enter={"opacity": 1, "delay": 500, "on_rest": on_rest})

        engine.compute(["a"], p, None)

        payload = controllers[0].last_payload
        assert payload["to"] == {"opacity": 1}
        assert payload["delay"] == 500
        payload["on_rest"]({"opacity": 1})
        on_rest.assert_called_once_with({"opacity": 1})

    def test_non_dict_target_passes_through(self, engine, controllers):
        async def script(next_step):
            await next_step({"opacity": 1})

        engine.compute(["a"], props(enter=lambda item, i: script), None)

        assert controllers[0].last_payload["to"] is script

    def test_producer_errors_propagate(self, engine):
        p = props(enter=lambda item, i: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            engine.compute(["a"], p, None)

    def test_on_rest_registers_expiry_only_when_leaving(self, engine, scheduler):
        user_on_rest = MagicMock()
        p = props(on_rest=user_on_rest, expires=250)
        prev = commit(engine.compute(["a"], p, None))
        enter_payload = prev[0].controller.last_payload

        enter_payload["on_rest"]({"opacity": 1})
        scheduler.register.assert_not_called()

        state = engine.compute([], p, prev)
        commit(state)
        state.changes[prev[0]].payload["on_rest"]({"opacity": 0})

        assert user_on_rest.call_count == 2
        scheduler.register.assert_called_once_with(prev[0], 250)

    def test_stale_leave_callback_after_reentry_is_ignored(self, engine, scheduler):
        p = props(expires=math.inf)
        prev = commit(engine.compute(["a"], p, None))
        leave = engine.compute([], p, prev)
        prev = commit(leave)
        commit(engine.compute(["a"], p, prev))

        leave.changes[prev[0]].payload["on_rest"]({"opacity": 0})

        scheduler.register.assert_not_called()
