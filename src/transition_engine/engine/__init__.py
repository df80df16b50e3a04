"""
Engine package - lifecycle diffing and animation controllers
"""

from .controller import BaseController, TweenController
from .diff_engine import LifecycleDiffEngine, match_items

__all__ = [
    "BaseController",
    "TweenController",
    "LifecycleDiffEngine",
    "match_items",
]
