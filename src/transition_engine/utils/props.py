"""
Prop helpers

Small resolvers shared by the diff engine and controllers:
- to_list: treat a scalar collection as a singleton
- call_prop: resolve a static value or an (item, index) producer
- interpolate_to: split reserved control fields out of a composite target
"""

from typing import Any, Dict, List, Tuple

# Payload fields that control the animation instead of being animated
RESERVED_KEYS = frozenset({
    "to",
    "from",
    "delay",
    "config",
    "immediate",
    "on_rest",
    "on_start",
})


def to_list(data: Any) -> List[Any]:
    """Return data as a list; None is empty, scalars become singletons."""
    if data is None:
        return []
    if isinstance(data, (list, tuple)):
        return list(data)
    return [data]


def call_prop(prop: Any, *args) -> Any:
    """
    Resolve a prop value.

    Callables are invoked with ``args`` (usually item and index); anything
    else is returned unchanged. Errors raised by the producer propagate.
    """
    if callable(prop):
        return prop(*args)
    return prop


def split_reserved(target: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Split a composite target into (reserved, forward) dicts.

    Example:
        >>> split_reserved({"opacity": 1, "delay": 200})
        ({'delay': 200}, {'opacity': 1})
    """
    reserved: Dict[str, Any] = {}
    forward: Dict[str, Any] = {}
    for key, value in target.items():
        if key in RESERVED_KEYS:
            reserved[key] = value
        else:
            forward[key] = value
    return reserved, forward


def interpolate_to(target: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a composite target into payload fields.

    Reserved fields are hoisted to the payload; the remaining animated
    fields become the new ``to`` unless the target carries its own.
    """
    reserved, forward = split_reserved(target)
    payload = dict(reserved)
    payload.setdefault("to", forward)
    return payload
