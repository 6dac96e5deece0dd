"""Lightweight event model used by the solver to decouple the game loop from output.

The loop emits typed events; the reporter turns them into log lines and grid
dumps, and tests can simply collect them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict


class Category(Enum):
    """High-level event categories."""

    TURN = auto()  # per-round lifecycle (round, shot, sunk)
    SYSTEM = auto()  # game end: won / stuck, or an unexplained hit cluster


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable event emitted by the game loop."""

    category: Category
    type: str  # finer-grained identifier, e.g. "shot", "sunk", "won"
    payload: Dict[str, Any]


Listener = Callable[[Event], None]


def ignore(_event: Event) -> None:
    """Listener that drops everything."""
