"""What the solver knows: the observed grid, the unsunk fleet and the open hit cluster."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Sequence, Set

import numpy as np

from . import config as _cfg
from .coord_utils import Coord
from .fleet import DEFAULT_FLEET, ShipKind


class CellStatus(enum.IntEnum):
    UNKNOWN = 0  # never targeted
    WATER = 1  # confirmed miss, or inferred from a sunk ship's perimeter
    HIT = 2  # ship cell, ship not yet confirmed sunk
    SUNK = 3  # ship cell, ship confirmed sunk


class Mode(enum.Enum):
    SEARCHING = "searching"  # open hit cluster empty
    FINISHING = "finishing"  # working on a hit ship


@dataclass
class GameState:
    """Mutable game record threaded through every round.

    ``remaining`` is a multiset (plain list) of unsunk kinds; ``cluster`` holds
    the hits belonging to the one ship currently being finished.
    """

    size: int
    observed: np.ndarray
    remaining: List[ShipKind]
    cluster: Set[Coord] = field(default_factory=set)
    heat: np.ndarray = field(default=None)  # type: ignore[assignment]
    round: int = 1
    shots: List[Coord] = field(default_factory=list)
    sunk: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.heat is None:
            self.heat = np.zeros((self.size, self.size), dtype=np.float64)

    @property
    def mode(self) -> Mode:
        return Mode.FINISHING if self.cluster else Mode.SEARCHING

    def status(self, coord: Coord) -> CellStatus:
        r, c = coord
        return CellStatus(int(self.observed[r, c]))

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the observed grid for display code."""
        snap = self.observed.copy()
        snap.setflags(write=False)
        return snap

    def count(self, status: CellStatus) -> int:
        return int(np.count_nonzero(self.observed == status))


def new_game(fleet: Sequence[ShipKind] = DEFAULT_FLEET, size: int = _cfg.BOARD_SIZE) -> GameState:
    """Fresh state: every cell UNKNOWN, the whole fleet afloat."""
    observed = np.full((size, size), CellStatus.UNKNOWN, dtype=np.int8)
    return GameState(size=size, observed=observed, remaining=list(fleet))
