"""Services layer"""

from .timer_service import TimerService
from .expiration_scheduler import ExpirationScheduler
from .change_applier import ChangeApplier
from .handle import TransitionHandle
from .render_adapter import RenderAdapter, RenderedNode
from .transition_host import TransitionHost

__all__ = [
    "TimerService",
    "ExpirationScheduler",
    "ChangeApplier",
    "TransitionHandle",
    "RenderAdapter",
    "RenderedNode",
    "TransitionHost",
]
