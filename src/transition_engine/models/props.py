"""
Transition props - caller-supplied configuration for a transition host
"""

import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional


@dataclass
class TransitionProps:
    """
    Configuration surface of a transition host.

    Target producers (initial, enter, update, leave, from_, config) may be
    static values, callables of (item, index), or callables returning an
    async script for the controller.

    Attributes:
        reset: Treat every pass as the first one
        trail: Stagger delay added per animated transition (ms)
        expires: Delay after a leave animation before dismissal (ms, inf = never)
        initial: Target for items mounted on the first pass (falls back to enter)
        enter: Target for new and reappearing items
        update: Target for persisting items (None = leave them untouched)
        leave: Target for removed items
        from_: Start values for entering items
        config: Per-item AnimationConfig (or dict of its fields)
        on_rest: Completion callback added to every payload
        manual: Controllers are started through the handle, never automatically
    """
    reset: bool = False
    trail: float = 0
    expires: float = math.inf
    initial: Any = None
    enter: Any = None
    update: Any = None
    leave: Any = None
    from_: Any = None
    config: Any = None
    on_rest: Optional[Callable[[dict], None]] = None
    manual: bool = False

    def merge(self, **overrides) -> "TransitionProps":
        """Return a copy with the given fields replaced"""
        return replace(self, **overrides)
