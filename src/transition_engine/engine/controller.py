"""
Animation Controllers

One controller per tracked transition. Controllers own the animated
values; the lifecycle engine only pushes payloads into them and starts,
stops, or destroys them.
"""

import asyncio
import itertools
from numbers import Number
from typing import Any, Callable, Dict, List, Optional

from transition_engine.models.animation import AnimationConfig
from transition_engine.models.enums import LogCategory
from transition_engine.utils.logger import get_logger
from transition_engine.utils.props import split_reserved

log = get_logger().for_category(LogCategory.CONTROLLER)

_controller_ids = itertools.count(1)


class BaseController:
    """
    Base class for animation controllers

    Subclasses MUST implement:
        update(payload)       merge animation instructions
        start(on_done=None)   begin/resume, call on_done once settled
        stop(finished=False)  halt immediately
        destroy()             release everything
        idle                  True when nothing is animating
        animated              snapshot of the current values
    """

    def __init__(self, controller_id: Optional[int] = None):
        self.id: int = controller_id if controller_id is not None else next(_controller_ids)

    @property
    def idle(self) -> bool:
        raise NotImplementedError

    @property
    def animated(self) -> Dict[str, Any]:
        raise NotImplementedError

    def update(self, payload: Dict[str, Any]) -> None:
        raise NotImplementedError

    def start(self, on_done: Optional[Callable[[], None]] = None) -> None:
        raise NotImplementedError

    def stop(self, finished: bool = False) -> None:
        raise NotImplementedError

    def destroy(self) -> None:
        raise NotImplementedError


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _coerce_step(step: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(step, dict) and "config" in step:
        return {**step, "config": AnimationConfig.coerce(step["config"])}
    return step


class TweenController(BaseController):
    """
    Asyncio tween controller

    • update() merges a payload; "from" values are applied immediately
    • start() spawns a task: wait "delay", then step numeric values toward
      "to" in eased steps (non-numeric values snap at the end)
    • "to" may be a dict, a list of dicts (chained) or an async script
      called with ``next`` (``await next({...})`` animates one target)

    Example:
        ctrl = TweenController()
        ctrl.update({"from": {"opacity": 0}, "to": {"opacity": 1},
                     "config": AnimationConfig(duration_ms=200)})
        ctrl.start(lambda: print("settled", ctrl.animated))
    """

    def __init__(self, controller_id: Optional[int] = None):
        super().__init__(controller_id)
        self.values: Dict[str, Any] = {}
        self.goal: Optional[Dict[str, Any]] = None
        self.destroyed = False

        self._pending: Optional[Dict[str, Any]] = None
        self._on_rest: Optional[Callable[[Dict[str, Any]], None]] = None
        self._done_callbacks: List[Callable[[], None]] = []
        self._task: Optional[asyncio.Task] = None
        self._running = False

    # ============================================================
    # State
    # ============================================================

    @property
    def idle(self) -> bool:
        return not self._running

    @property
    def animated(self) -> Dict[str, Any]:
        return dict(self.values)

    # ============================================================
    # Control
    # ============================================================

    def update(self, payload: Dict[str, Any]) -> None:
        """
        Merge animation instructions; applied on the next start().

        Raises TypeError for a malformed config (payload or list step)
        before anything is merged.
        """
        payload = dict(payload)
        if "config" in payload:
            payload["config"] = AnimationConfig.coerce(payload["config"])

        goal = payload.get("to")
        if isinstance(goal, (list, tuple)):
            payload["to"] = [_coerce_step(step) for step in goal]

        from_values = payload.get("from")
        if isinstance(from_values, dict):
            self.values.update(from_values)

        self._pending = {**(self._pending or {}), **payload}

    def start(self, on_done: Optional[Callable[[], None]] = None) -> None:
        """
        Start animating toward the pending payload.

        Without a pending payload this only waits: on_done fires when the
        current animation settles, or right away when already idle.
        """
        if on_done is not None:
            self._done_callbacks.append(on_done)

        if self.destroyed:
            log.debug(f"Controller #{self.id} destroyed, start ignored")
            self._flush_done()
            return

        if self._pending is None:
            if not self._running:
                self._flush_done()
            return

        payload, self._pending = self._pending, None

        # Interrupt the current animation; its on_rest never fires
        if self._task is not None and not self._task.done():
            self._task.cancel()

        goal = payload.get("to")
        self.goal = goal if isinstance(goal, dict) else None
        self._on_rest = payload.get("on_rest")
        self._running = True
        self._task = asyncio.get_running_loop().create_task(self._run(payload))

    def stop(self, finished: bool = False) -> None:
        """
        Halt immediately.

        finished=True snaps to the goal and fires on_rest; otherwise the
        values stay where they are. Pending on_done callbacks are released
        either way.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

        if not self._running:
            self._flush_done()
            return

        if finished and self.goal:
            self.values.update(self.goal)
        self._settle(finished)

    def destroy(self) -> None:
        self.stop()
        self.destroyed = True
        self._pending = None
        self._done_callbacks.clear()
        log.debug(f"Controller #{self.id} destroyed")

    # ============================================================
    # Internal animation loop
    # ============================================================

    async def _run(self, payload: Dict[str, Any]):
        """Run one payload until settled. Cancellation leaves state to the canceller."""
        try:
            delay = payload.get("delay") or 0
            config = AnimationConfig.coerce(payload.get("config"))
            goal = payload.get("to")

            if delay > 0:
                await asyncio.sleep(delay / 1000)

            async def next_step(props: Dict[str, Any]):
                reserved, forward = split_reserved(props)
                step_config = config
                if "config" in reserved:
                    step_config = AnimationConfig.coerce(reserved["config"])
                await self._tween(forward, step_config, payload.get("immediate", False))

            if callable(goal):
                await goal(next_step)
            elif isinstance(goal, (list, tuple)):
                for step in goal:
                    await next_step(step)
            elif isinstance(goal, dict):
                await next_step(goal)

            self._settle(finished=True)

        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.error(f"Animation error on controller #{self.id}: {e}", exception=type(e).__name__)
            self._settle(finished=False)

    async def _tween(self, target: Dict[str, Any], config: AnimationConfig, immediate: bool = False):
        """Step numeric values from their current value to target"""
        self.goal = target
        if not target:
            return

        start = {key: self.values.get(key, value) for key, value in target.items()}
        numeric = [key for key in target if _is_number(start[key]) and _is_number(target[key])]

        if not immediate and config.duration_ms > 0 and numeric:
            step_delay = config.duration_ms / 1000 / config.steps
            for step in range(1, config.steps + 1):
                await asyncio.sleep(step_delay)
                factor = config.ease_function(step / config.steps)
                for key in numeric:
                    self.values[key] = start[key] + (target[key] - start[key]) * factor

        self.values.update(target)

    def _settle(self, finished: bool):
        # Become idle before callbacks run so sibling idle checks see it
        self._running = False
        self._task = None
        on_rest, self._on_rest = self._on_rest, None
        if finished and on_rest is not None:
            on_rest(self.animated)
        self._flush_done()

    def _flush_done(self):
        callbacks, self._done_callbacks = self._done_callbacks, []
        for callback in callbacks:
            callback()
