"""
Utility functions for the transition engine
"""

from .enum_helper import EnumHelper
from .props import (
    to_list,
    call_prop,
    split_reserved,
    interpolate_to,
)

__all__ = [
    'EnumHelper',
    'to_list',
    'call_prop',
    'split_reserved',
    'interpolate_to',
]
