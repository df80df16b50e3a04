"""
Animation Models

Defines the per-animation timing configuration consumed by controllers,
plus the easing curves available to it.
"""

from typing import Optional, Callable, Dict, Any

from transition_engine.models.enums import EasingID


class AnimationConfig:
    """
    Timing configuration for one controller animation

    Reusable configuration object describing how a controller moves from
    its current values to a target. Usually produced per item by the
    ``config`` prop of a transition.

    Attributes:
        duration_ms: Total animation duration in milliseconds
        steps: Number of intermediate frames
        ease_function: Easing function (t: 0.0-1.0) → (factor: 0.0-1.0)

    Examples:
        # Slow fade for entering items
        enter_config = AnimationConfig(duration_ms=800, steps=40)

        # Snappy leave with ease-out
        leave_config = AnimationConfig(
            duration_ms=150,
            steps=8,
            ease_function=ease_out_quad
        )

        # Instant (no tween)
        instant = AnimationConfig(duration_ms=0)
    """

    def __init__(
        self,
        duration_ms: float = 300,
        steps: int = 10,
        ease_function: Optional[Callable[[float], float]] = None
    ):
        """
        Initialize animation configuration

        Args:
            duration_ms: Total duration in milliseconds (0 = snap to target)
            steps: Number of intermediate frames
            ease_function: Optional easing function
        """
        self.duration_ms = max(0, duration_ms)
        self.steps = max(1, steps)  # At least 1 step
        self.ease_function = ease_function or ease_linear

    @classmethod
    def coerce(cls, value: Any) -> "AnimationConfig":
        """Accept an AnimationConfig, a dict of its fields, or None (defaults)"""
        if isinstance(value, AnimationConfig):
            return value
        if value is None:
            return cls()
        if isinstance(value, dict):
            return cls(**value)
        raise TypeError(f"Invalid animation config: {type(value).__name__}")

    def __repr__(self):
        return f"AnimationConfig({self.duration_ms}ms, {self.steps} steps)"


# === Easing Functions ===

def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        Interpolation factor (0.0 to 1.0)
    """
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    """Cubic ease-in (very slow start)"""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


EASING_FUNCTIONS: Dict[EasingID, Callable[[float], float]] = {
    EasingID.LINEAR: ease_linear,
    EasingID.IN_QUAD: ease_in_quad,
    EasingID.OUT_QUAD: ease_out_quad,
    EasingID.IN_OUT_QUAD: ease_in_out_quad,
    EasingID.IN_CUBIC: ease_in_cubic,
    EasingID.OUT_CUBIC: ease_out_cubic,
    EasingID.IN_OUT_CUBIC: ease_in_out_cubic,
}
