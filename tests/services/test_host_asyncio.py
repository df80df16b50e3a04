"""
Integration tests: TransitionHost with TweenController and the asyncio
TimerService, no fakes.
"""

import asyncio

import pytest

from transition_engine.models.enums import Phase
from transition_engine.models.props import TransitionProps
from transition_engine.services.transition_host import TransitionHost


def fade_props(**kw):
    kw.setdefault("from_", {"opacity": 0})
    kw.setdefault("enter", {"opacity": 1})
    kw.setdefault("leave", {"opacity": 0})
    kw.setdefault("config", {"duration_ms": 0})
    return TransitionProps(**kw)


@pytest.mark.asyncio
async def test_removed_item_is_dismissed_after_leave():
    passes = []
    host = TransitionHost(fade_props(expires=0), on_pass=passes.append)

    host.update(["a", "b"])
    await asyncio.sleep(0.05)
    assert [t.controller.animated for t in host.transitions] == [{"opacity": 1}, {"opacity": 1}]

    host.update(["a"])
    await asyncio.sleep(0.05)

    assert [t.item for t in host.transitions] == ["a"]
    assert len(passes) == 1
    host.destroy()


@pytest.mark.asyncio
async def test_busy_sibling_delays_dismissal_by_expires():
    host = TransitionHost(fade_props(
        expires=30,
        update={"opacity": 0.5},
        config=lambda item, i: {"duration_ms": 300 if item == "a" else 0, "steps": 10},
    ))

    host.update(["a", "b"])
    await asyncio.sleep(0)
    host.update(["a"])
    a, b = host.transitions
    assert b.phase == Phase.LEAVE

    await asyncio.sleep(0.01)
    assert b.expiration_id is not None
    assert host.transitions == [a, b]

    await asyncio.sleep(0.1)
    assert host.transitions == [a]
    assert not a.controller.idle
    host.destroy()


@pytest.mark.asyncio
async def test_manual_host_started_through_handle():
    host = TransitionHost(fade_props(manual=True))
    host.update(["a", "b"])
    assert all(t.controller.idle for t in host.transitions)

    await asyncio.wait_for(host.handle.start(), 1.0)

    assert [t.controller.animated for t in host.transitions] == [{"opacity": 1}, {"opacity": 1}]
    host.destroy()


@pytest.mark.asyncio
async def test_destroy_stops_running_animations():
    host = TransitionHost(fade_props(config={"duration_ms": 5000, "steps": 5}))
    host.update(["a"])
    await asyncio.sleep(0)

    host.destroy()

    controller = host.transitions[0].controller
    assert controller.destroyed is True
    assert controller.idle is True


@pytest.mark.asyncio
async def test_reset_pass_destroys_replaced_controllers():
    host = TransitionHost(fade_props(config={"duration_ms": 500, "steps": 5}))
    host.update(["a"])
    old = host.transitions[0].controller
    await asyncio.sleep(0)

    host.update(["a"], props=host.props.merge(reset=True))
    new = host.transitions[0].controller

    assert new is not old
    assert old.destroyed is True
    assert old.idle is True

    host.destroy()
    assert new.destroyed is True


@pytest.mark.asyncio
async def test_malformed_config_raises_from_the_pass():
    host = TransitionHost(fade_props(config={"duration": 10}))

    with pytest.raises(TypeError):
        host.update(["a"])

    host.destroy()


@pytest.mark.asyncio
async def test_malformed_leave_config_keeps_transition_entered():
    good = fade_props(expires=0)
    host = TransitionHost(good)
    host.update(["a"])
    await asyncio.sleep(0.01)

    with pytest.raises(TypeError):
        host.update([], props=good.merge(config=lambda item, i: {"duration": 10}))

    assert host.transitions[0].phase == Phase.ENTER
    host.destroy()
