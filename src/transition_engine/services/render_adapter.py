"""
Render Adapter

Maps tracked transitions to output nodes keyed by transition id, so the
rendered state of one transition survives phase changes even when its
item is replaced by an equal successor.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from transition_engine.models.enums import LogCategory
from transition_engine.models.transition import Transition
from transition_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.RENDER)


@dataclass(frozen=True)
class RenderedNode:
    """Output of the render function, tagged with its transition id"""
    key: int
    node: Any


RenderFn = Callable[[Dict[str, Any], Any], Any]


class RenderAdapter:
    """Calls a render function for each transition with its animated values"""

    def render(self, transitions: List[Transition], render_fn: RenderFn) -> List[Optional[RenderedNode]]:
        """
        Render every transition in sequence order.

        None outputs are passed through untagged.
        """
        nodes: List[Optional[RenderedNode]] = []
        for t in transitions:
            node = render_fn(t.controller.animated, t.item)
            nodes.append(RenderedNode(key=t.id, node=node) if node is not None else None)
        log.debug("Rendered transitions", count=len(nodes))
        return nodes
