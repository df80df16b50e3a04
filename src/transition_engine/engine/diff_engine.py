"""
Lifecycle Diff Engine

Computes one pass: given the current item collection and the previously
committed transitions, produces the new tracked sequence and the phase /
payload changes to commit.

Phase rules per transition (sequence order):
    MOUNT             → ENTER  (to = initial on first pass, else enter)
    ENTER / UPDATE    → LEAVE  if the item is gone (to = leave)
                      → UPDATE if an update target exists (to = update)
                      → untouched otherwise
    LEAVE             → ENTER  if the item reappeared (to = enter)
                      → untouched otherwise
"""

from typing import Any, Callable, Dict, List, Optional, Set, Tuple, TYPE_CHECKING

from transition_engine.engine.controller import BaseController, TweenController
from transition_engine.models.enums import LogCategory, Phase
from transition_engine.models.props import TransitionProps
from transition_engine.models.transition import Change, Transition, TransitionState
from transition_engine.utils.logger import get_logger
from transition_engine.utils.props import call_prop, interpolate_to, to_list

if TYPE_CHECKING:
    from transition_engine.services.expiration_scheduler import ExpirationScheduler

log = get_logger().for_category(LogCategory.DIFF)


def _index_of(items: List[Any], item: Any) -> int:
    for index, candidate in enumerate(items):
        if candidate is item or candidate == item:
            return index
    return -1


def match_items(transitions: List[Transition], items: List[Any]) -> Tuple[Set[int], List[Any]]:
    """
    Pair carried transitions with current items, one to one.

    Each transition, in sequence order, claims the first equal item not yet
    claimed, so duplicates pair up by discovery order.

    Returns:
        (ids of transitions whose item is present, unclaimed items in order)
    """
    unclaimed = list(items)
    present: Set[int] = set()
    for t in transitions:
        index = _index_of(unclaimed, t.item)
        if index >= 0:
            present.add(t.id)
            del unclaimed[index]
    return present, unclaimed


class LifecycleDiffEngine:
    """
    Diffs item collections into transition lifecycle changes.

    Payloads of transitions created in the current pass are pushed into
    their controllers immediately, so their animated values exist before
    anything renders; all other payloads wait for the commit step.

    Args:
        scheduler: Expiration scheduler notified when a leave settles
        controller_factory: Builds the controller of each new transition
    """

    def __init__(
        self,
        scheduler: "ExpirationScheduler",
        controller_factory: Callable[[], BaseController] = TweenController,
    ):
        self.scheduler = scheduler
        self.controller_factory = controller_factory

    def compute(
        self,
        data: Any,
        props: TransitionProps,
        previous: Optional[List[Transition]] = None,
    ) -> TransitionState:
        """
        Run one pass.

        Args:
            data: Current collection (a scalar counts as a singleton)
            props: Transition props for this pass
            previous: Last committed tracked sequence (None on first pass)

        Returns:
            TransitionState with the new sequence and its change map
        """
        items = to_list(data)
        transitions: List[Transition] = []
        present: Set[int] = set()
        new_items = items

        is_first = props.reset or previous is None
        if not is_first:
            # Reuse old transitions unless expired
            for t in previous:
                if t.expires_by is None:
                    transitions.append(t)
                else:
                    self.scheduler.cancel(t)
                    log.debug(f"Dropped expired transition #{t.id}")

            present, new_items = match_items(transitions, items)
        elif previous:
            for t in previous:
                self.scheduler.cancel(t)

        for item in new_items:
            controller = self.controller_factory()
            transitions.append(Transition(id=controller.id, item=item, phase=Phase.MOUNT, controller=controller))

        # Cumulative delay for the "trail" prop
        delay = -props.trail

        changes: Dict[Transition, Change] = {}
        for index, t in enumerate(transitions):
            if t.phase == Phase.MOUNT:
                to = props.initial if is_first and props.initial is not None else props.enter
                phase = Phase.ENTER
            else:
                is_deleted = t.id not in present
                if t.phase < Phase.LEAVE:
                    if is_deleted:
                        to, phase = props.leave, Phase.LEAVE
                    elif props.update is not None:
                        to, phase = props.update, Phase.UPDATE
                    else:
                        continue
                elif not is_deleted:
                    to, phase = props.enter, Phase.ENTER
                else:
                    continue

            to = call_prop(to, t.item, index)
            delay += props.trail

            payload: Dict[str, Any] = {
                "to": to,
                "from": call_prop(props.from_, t.item, index) if phase < Phase.UPDATE else None,
                "delay": delay,
                "config": call_prop(props.config, t.item, index),
                "on_rest": props.on_rest,
            }
            if isinstance(to, dict):
                payload.update(interpolate_to(to))

            payload["on_rest"] = self._wrap_on_rest(t, payload.get("on_rest"), props.expires)

            change = Change(phase)
            changes[t] = change

            if t.phase > Phase.MOUNT:
                change.payload = payload
            else:
                t.controller.update(payload)

        log.debug(
            "Pass computed",
            first=is_first,
            transitions=len(transitions),
            new=len(new_items),
            changes=len(changes),
        )
        return TransitionState(transitions=transitions, changes=changes, is_first=is_first)

    def _wrap_on_rest(self, t: Transition, on_rest: Any, expires: float) -> Callable[[Dict[str, Any]], None]:
        def handle_rest(values: Dict[str, Any]):
            if callable(on_rest):
                on_rest(values)
            if t.phase == Phase.LEAVE:
                self.scheduler.register(t, expires)

        return handle_rest
