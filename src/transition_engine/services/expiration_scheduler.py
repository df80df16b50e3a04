"""
Expiration Scheduler

Decides when a leaving transition, once its leave animation has settled,
is dismissed. Dismissal itself happens in the next diff pass, which drops
every transition whose ``expires_by`` is set; this service only decides
*when* that pass is requested.

Policy:
- expires <= 0            → request a pass now
- every controller idle   → request a pass now (nothing else is animating)
- expires finite          → request a pass after ``expires`` ms (timer)
- expires infinite        → nothing; a later unrelated pass drops it
"""

import math
import time
from typing import Callable, List, Optional

from transition_engine.models.enums import LogCategory
from transition_engine.models.transition import Transition
from transition_engine.services.timer_service import TimerService
from transition_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EXPIRATION)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class ExpirationScheduler:
    """
    Schedules the dismissal of settled leaving transitions.

    Args:
        timers: Timer primitives
        request_pass: Host re-evaluation trigger (coalescing)
        get_transitions: Returns the latest committed tracked sequence
        clock: Millisecond clock used for ``expires_by``
    """

    def __init__(
        self,
        timers: TimerService,
        request_pass: Callable[[], None],
        get_transitions: Callable[[], List[Transition]],
        clock: Optional[Callable[[], float]] = None,
    ):
        self.timers = timers
        self.request_pass = request_pass
        self.get_transitions = get_transitions
        self.clock = clock or monotonic_ms
        self.closed = False

    def register(self, transition: Transition, expires: float = math.inf) -> None:
        """Mark a settled leaving transition as expired and schedule its dismissal"""
        if self.closed:
            log.debug(f"Scheduler closed, ignoring expiry of #{transition.id}")
            return
        if transition.is_expired:
            return

        # At most one pending timer per transition
        self.cancel(transition)
        transition.expires_by = self.clock() + expires

        if expires <= 0:
            log.debug(f"Transition #{transition.id} expired, dismissing now")
            self.request_pass()
            return

        # Postpone dismissal while other controllers are active
        if all(t.controller.idle for t in self.get_transitions()):
            log.debug(f"Transition #{transition.id} expired, all controllers idle")
            self.request_pass()
        elif expires < math.inf:
            transition.expiration_id = self.timers.schedule(expires, self.request_pass)
            log.debug(f"Dismissal of #{transition.id} scheduled", expires_ms=expires)
        else:
            log.debug(f"Transition #{transition.id} expired, waiting for next pass")

    def cancel(self, transition: Transition) -> None:
        """Cancel a pending dismissal timer (no-op when none)"""
        if transition.expiration_id is not None:
            self.timers.cancel(transition.expiration_id)
            transition.expiration_id = None

    def close(self) -> None:
        """Cancel every pending timer of the tracked sequence and ignore later expiries"""
        self.closed = True
        for transition in self.get_transitions():
            self.cancel(transition)
