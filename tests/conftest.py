import pytest

from transition_engine.engine.controller import BaseController
from transition_engine.models.props import TransitionProps
from transition_engine.services.transition_host import TransitionHost


class FakeHandle:
    """Timer handle of FakeTimers"""

    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeTimers:
    """
    Manual clock + timer service.

    call_soon callbacks run on flush(); scheduled timers run on advance().
    """

    def __init__(self):
        self.now = 0.0
        self.handles = []
        self.soon = []

    def clock(self):
        return self.now

    def schedule(self, delay_ms, callback):
        handle = FakeHandle(self.now + delay_ms, callback)
        self.handles.append(handle)
        return handle

    def cancel(self, handle):
        if handle is not None:
            handle.cancel()

    def call_soon(self, callback):
        self.soon.append(callback)

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def flush(self):
        while self.soon:
            callback = self.soon.pop(0)
            callback()

    def advance(self, ms):
        self.now += ms
        for handle in self.pending:
            if handle.due <= self.now:
                handle.fired = True
                handle.callback()
        self.flush()


class FakeController(BaseController):
    """
    Recording controller.

    start() activates the pending payload; finish() settles it the way a
    real controller does (idle first, then on_rest, then on_done).
    """

    def __init__(self):
        super().__init__()
        self.values = {}
        self.updates = []
        self.start_calls = 0
        self.stop_calls = []
        self.destroyed = False
        self.busy = False
        self.active = None
        self._pending = None
        self._done = []

    @property
    def idle(self):
        return not self.busy

    @property
    def animated(self):
        return dict(self.values)

    @property
    def last_payload(self):
        return self.updates[-1] if self.updates else None

    def update(self, payload):
        self.updates.append(payload)
        if isinstance(payload.get("from"), dict):
            self.values.update(payload["from"])
        self._pending = payload

    def start(self, on_done=None):
        self.start_calls += 1
        if on_done is not None:
            self._done.append(on_done)
        if self._pending is not None:
            self.active, self._pending = self._pending, None
            self.busy = True
        elif not self.busy:
            self._flush()

    def finish(self):
        payload, self.active = self.active, None
        self.busy = False
        if payload is not None:
            if isinstance(payload.get("to"), dict):
                self.values.update(payload["to"])
            if payload.get("on_rest") is not None:
                payload["on_rest"](self.animated)
        self._flush()

    def stop(self, finished=False):
        self.stop_calls.append(finished)
        if finished:
            self.finish()
        else:
            self.busy = False
            self.active = None
            self._flush()

    def destroy(self):
        self.destroyed = True
        self.busy = False

    def _flush(self):
        callbacks, self._done = self._done, []
        for callback in callbacks:
            callback()


@pytest.fixture
def fake_timers():
    return FakeTimers()


@pytest.fixture
def controllers():
    """Every FakeController created by controller_factory, in order"""
    return []


@pytest.fixture
def controller_factory(controllers):
    def factory():
        controller = FakeController()
        controllers.append(controller)
        return controller
    return factory


@pytest.fixture
def make_host(fake_timers, controller_factory):
    """Build a TransitionHost wired to fake timers and fake controllers"""
    def build(on_pass=None, **props):
        props.setdefault("enter", {"opacity": 1})
        props.setdefault("leave", {"opacity": 0})
        return TransitionHost(
            TransitionProps(**props),
            controller_factory=controller_factory,
            timers=fake_timers,
            clock=fake_timers.clock,
            on_pass=on_pass,
        )
    return build
