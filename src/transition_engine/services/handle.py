"""
Transition Handle

Imperative controls over every controller of the latest committed
sequence. Used when props.manual is set, or to halt everything.
"""

import asyncio
from typing import Callable, List

from transition_engine.engine.controller import BaseController
from transition_engine.models.transition import Transition


def _resolve(future: asyncio.Future):
    if not future.done():
        future.set_result(None)


class TransitionHandle:
    """
    Live view over the tracked controllers

    Example:
        handle = host.handle
        await handle.start()      # resolves once every controller settled
        handle.stop(finished=True)
    """

    def __init__(self, get_transitions: Callable[[], List[Transition]]):
        self._get_transitions = get_transitions

    @property
    def controllers(self) -> List[BaseController]:
        return [t.controller for t in self._get_transitions()]

    def start(self) -> asyncio.Future:
        """Start every controller; the returned future resolves when all have settled"""
        loop = asyncio.get_running_loop()
        futures = []
        for controller in self.controllers:
            future = loop.create_future()
            controller.start(lambda future=future: _resolve(future))
            futures.append(future)
        return asyncio.gather(*futures)

    def stop(self, finished: bool = False) -> None:
        """Halt every controller, optionally marking each as finished"""
        for controller in self.controllers:
            controller.stop(finished)
