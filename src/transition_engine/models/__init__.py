"""
Models package - Data models for the transition lifecycle engine
"""

from .enums import Phase, EasingID, LogLevel, LogCategory
from .animation import AnimationConfig
from .transition import Transition, Change, TransitionState
from .props import TransitionProps

__all__ = [
    'Phase',
    'EasingID',
    'LogLevel',
    'LogCategory',
    'AnimationConfig',
    'Transition',
    'Change',
    'TransitionState',
    'TransitionProps',
]
