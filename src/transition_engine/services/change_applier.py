"""
Change Applier

Commit step of a pass: moves each transition to its new phase, pushes
deferred payloads into controllers and starts them.
"""

from typing import Dict

from transition_engine.models.enums import LogCategory
from transition_engine.models.transition import Change, Transition
from transition_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.LIFECYCLE)


class ChangeApplier:
    """Applies a pass's change map to its transitions"""

    def apply(self, changes: Dict[Transition, Change], manual: bool = False) -> None:
        """
        Commit changes in sequence order.

        Args:
            changes: Change map produced by the diff engine
            manual: Controllers are started through the handle only
        """
        for t, change in changes.items():
            # A rejected payload leaves the phase untouched
            if change.payload is not None:
                t.controller.update(change.payload)
            if t.phase != change.phase:
                log.debug(f"Transition #{t.id}: {t.phase.name} → {change.phase.name}")
            t.phase = change.phase
            if not manual:
                t.controller.start()
