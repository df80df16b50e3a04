"""
Transition Models

Per-item lifecycle records tracked across passes, and the ephemeral
changes computed for them by the diff engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from transition_engine.models.enums import Phase

if TYPE_CHECKING:
    from transition_engine.engine.controller import BaseController


# ---------------------------------------------------------------------------
# TRANSITION
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class Transition:
    """
    Lifecycle state of one tracked item instance.

    Compared and hashed by identity, so it can key the change map even
    when two transitions track equal items.
    """
    id: int
    item: Any
    phase: Phase
    controller: "BaseController"
    expires_by: Optional[float] = None  # Destroy no later than this (ms)
    expiration_id: Optional[Any] = None  # Pending dismissal timer handle

    @property
    def is_expired(self) -> bool:
        return self.expires_by is not None

    def __repr__(self):
        return f"Transition(#{self.id}, {self.item!r}, {self.phase.name})"


# ---------------------------------------------------------------------------
# CHANGE
# ---------------------------------------------------------------------------

@dataclass
class Change:
    """Target phase and optional animation payload for one pass."""
    phase: Phase
    payload: Optional[Dict[str, Any]] = None


# ---------------------------------------------------------------------------
# PASS OUTPUT
# ---------------------------------------------------------------------------

@dataclass
class TransitionState:
    """Output of one diff pass: the new tracked sequence and its changes."""
    transitions: List[Transition] = field(default_factory=list)
    changes: Dict[Transition, Change] = field(default_factory=dict)
    is_first: bool = False
