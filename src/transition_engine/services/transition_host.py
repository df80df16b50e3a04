"""
Transition Host

Owns the tracked transition sequence of one animated collection and runs
passes over it:

- diff()          render step: compute the new sequence and changes
- commit()        commit step: publish the sequence, apply the changes
- update()        diff + commit
- request_pass()  re-evaluation trigger used by expiry (coalesced)
- render()        map transitions to keyed output nodes
- handle          imperative start/stop over all controllers
- destroy()       teardown
"""

from typing import Any, Callable, List, Optional

from transition_engine.engine.controller import BaseController, TweenController
from transition_engine.engine.diff_engine import LifecycleDiffEngine
from transition_engine.models.enums import LogCategory
from transition_engine.models.props import TransitionProps
from transition_engine.models.transition import Transition, TransitionState
from transition_engine.services.change_applier import ChangeApplier
from transition_engine.services.expiration_scheduler import ExpirationScheduler
from transition_engine.services.handle import TransitionHandle
from transition_engine.services.render_adapter import RenderAdapter, RenderFn, RenderedNode
from transition_engine.services.timer_service import TimerService
from transition_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.LIFECYCLE)

_UNSET = object()


class TransitionHost:
    """
    Host for list enter/update/leave animations

    Every item of the collection gets its own transition and controller.
    Items that disappear animate out with ``leave`` and are dropped by a
    later pass once the leave animation has settled and ``expires`` allows.

    Example:
        host = TransitionHost(TransitionProps(
            from_={"opacity": 0},
            enter={"opacity": 1},
            leave={"opacity": 0},
            trail=100,
            expires=0,
        ), on_pass=lambda state: redraw())

        host.update(["a", "b", "c"])
        nodes = host.render(lambda values, item: (item, values["opacity"]))

        host.update(["a", "c"])   # "b" leaves, then is dropped
        ...
        host.destroy()
    """

    def __init__(
        self,
        props: Optional[TransitionProps] = None,
        controller_factory: Callable[[], BaseController] = TweenController,
        timers: Optional[TimerService] = None,
        clock: Optional[Callable[[], float]] = None,
        on_pass: Optional[Callable[[TransitionState], None]] = None,
    ):
        """
        Initialize transition host

        Args:
            props: Transition props (defaults: no targets, never expire)
            controller_factory: Builds one controller per transition
            timers: Timer primitives (asyncio loop by default)
            clock: Millisecond clock for expiry timestamps
            on_pass: Called after every pass triggered by request_pass()
        """
        self.props = props or TransitionProps()
        self.timers = timers or TimerService()
        self.on_pass = on_pass
        self.destroyed = False

        # Latest committed sequence, read by callbacks of earlier passes
        self._committed: Optional[List[Transition]] = None
        self._state = TransitionState()
        self._data: Any = None
        self._deps: Any = _UNSET
        self._pass_pending = False

        self.scheduler = ExpirationScheduler(self.timers, self.request_pass, self._get_committed, clock)
        self.engine = LifecycleDiffEngine(self.scheduler, controller_factory)
        self.applier = ChangeApplier()
        self.handle = TransitionHandle(self._get_committed)
        self.renderer = RenderAdapter()

    def _get_committed(self) -> List[Transition]:
        return self._committed or []

    @property
    def transitions(self) -> List[Transition]:
        """Sequence computed by the latest pass"""
        return self._state.transitions

    # ============================================================
    # Passes
    # ============================================================

    def diff(self, data: Any) -> TransitionState:
        """Render step: diff data against the last committed sequence"""
        self._data = data
        self._state = self.engine.compute(data, self.props, self._committed)
        return self._state

    def commit(self, state: Optional[TransitionState] = None, deps: Any = None) -> None:
        """
        Commit step: publish the sequence and apply its changes.

        Changes are skipped when deps are given and equal to the previous
        commit's deps (unless props.reset); the sequence is always published.
        Controllers of transitions no longer tracked (expired or reset away)
        are destroyed.
        """
        state = state or self._state
        previous = self._get_committed()
        self._committed = state.transitions

        for t in previous:
            if not any(t is kept for kept in state.transitions):
                t.controller.destroy()
                log.debug(f"Transition #{t.id} dropped, controller destroyed")

        if self.props.reset or deps is None or deps != self._deps:
            self.applier.apply(state.changes, manual=self.props.manual)
        else:
            log.debug("Deps unchanged, changes not applied", changes=len(state.changes))
        self._deps = deps

    def update(self, data: Any, props: Optional[TransitionProps] = None, deps: Any = None) -> TransitionState:
        """Run a full pass (diff + commit), optionally with new props"""
        if self.destroyed:
            log.warn("Update on destroyed transition host ignored")
            return self._state

        if props is not None:
            self.props = props

        state = self.diff(data)
        self.commit(state, deps)
        return state

    def request_pass(self) -> None:
        """Schedule another pass with the latest data; calls before it runs coalesce"""
        if self.destroyed or self._pass_pending:
            return
        self._pass_pending = True
        self.timers.call_soon(self._run_requested_pass)

    def _run_requested_pass(self):
        self._pass_pending = False
        if self.destroyed:
            log.debug("Requested pass after teardown ignored")
            return

        deps = None if self._deps is _UNSET else self._deps
        state = self.update(self._data, deps=deps)
        if self.on_pass is not None:
            self.on_pass(state)

    # ============================================================
    # Output
    # ============================================================

    def render(self, render_fn: RenderFn) -> List[Optional[RenderedNode]]:
        """Render the latest sequence, keyed by transition id"""
        return self.renderer.render(self._state.transitions, render_fn)

    # ============================================================
    # Teardown
    # ============================================================

    def destroy(self) -> None:
        """Destroy every controller and cancel pending dismissals"""
        if self.destroyed:
            return
        self.destroyed = True

        self.scheduler.close()
        transitions = self._get_committed()
        for t in transitions:
            t.controller.destroy()

        log.info("Transition host destroyed", category=LogCategory.SYSTEM, transitions=len(transitions))
