"""
Enums for the transition lifecycle state machine
"""

from enum import Enum, IntEnum, auto


class Phase(IntEnum):
    """
    Lifecycle phase of a tracked transition

    Ordered: MOUNT < ENTER < UPDATE < LEAVE
    """
    MOUNT = 0    # Created in the current pass, not yet committed
    ENTER = 1    # Entering or has entered
    UPDATE = 2   # Animations were updated while the item persisted
    LEAVE = 3    # Item is gone, transition expires after animating


class EasingID(Enum):
    """Named easing curves (used by YAML presets)"""
    LINEAR = auto()
    IN_QUAD = auto()
    OUT_QUAD = auto()
    IN_OUT_QUAD = auto()
    IN_CUBIC = auto()
    OUT_CUBIC = auto()
    IN_OUT_CUBIC = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Preset loading, validation
    DIFF = auto()        # Lifecycle diff passes
    LIFECYCLE = auto()   # Phase commits, host passes
    EXPIRATION = auto()  # Leave expiry, timers
    CONTROLLER = auto()  # Animation controllers
    RENDER = auto()      # Render adapter
    SYSTEM = auto()      # Setup, teardown
