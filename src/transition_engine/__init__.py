"""
Transition Engine

Enter / update / leave lifecycle animations for dynamic item collections.
"""

from .models import Phase, AnimationConfig, Transition, Change, TransitionState, TransitionProps
from .engine import BaseController, TweenController, LifecycleDiffEngine
from .services import TransitionHost, TransitionHandle, RenderedNode, TimerService
from .managers import ConfigManager

__version__ = "1.0.0"

__all__ = [
    "Phase",
    "AnimationConfig",
    "Transition",
    "Change",
    "TransitionState",
    "TransitionProps",
    "BaseController",
    "TweenController",
    "LifecycleDiffEngine",
    "TransitionHost",
    "TransitionHandle",
    "RenderedNode",
    "TimerService",
    "ConfigManager",
]
