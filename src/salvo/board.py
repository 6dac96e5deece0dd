"""
board.py

The hidden side of the game: where the opponent's ships really are.
 - Board class storing the ship layout ('.' for water, a ship letter otherwise)
 - Seeded random placement honouring the no-touching rule
 - A canned 12x12 layout of the default fleet for reproducible runs

The solver only ever asks ``board.is_ship(row, col)``; it never reads the
whole grid.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from . import config as _cfg
from .coord_utils import Coord, try_get
from .fleet import CARRIER, DEFAULT_FLEET, FIVE, FOUR, THREE, TWO, OrientedShape, ShipKind, orient

logger = logging.getLogger(__name__)

WATER = "."

# Single-char symbols for each ship kind on the hidden grid
SHIP_LETTERS = {
    CARRIER.name: "C",
    FIVE.name: "5",
    FOUR.name: "4",
    THREE.name: "3",
    TWO.name: "2",
}

# Default fleet on a 12x12 grid, no two ships touching (not even diagonally).
CANNED_ROWS = (
    ".C.C...55555",
    "CCCCC.......",
    ".C.C........",
    "...........4",
    "...........4",
    "..333......4",
    "...........4",
    "............",
    ".......3....",
    ".......3....",
    ".......3....",
    "22..........",
)


class BoardGenerationError(RuntimeError):
    """Raised when a fleet cannot be fitted onto the board."""


class BoardFormatError(ValueError):
    """Raised when a canned layout is not a square grid."""


class Board:
    """
    A single hidden Battleship board.
    We store:
      - self.hidden_grid: '.' for water, a ship letter for every ship cell
      - self.placed_ships: a list of dicts, each dict with:
          {
             'name': <ship kind name>,
             'positions': set of (r, c),
          }
        one entry per ship; canned layouts carry no names.

    Once generated, the layout never changes.
    """

    def __init__(self, size: int = _cfg.BOARD_SIZE):
        """Initialise an empty *size*×*size* board with no ships placed."""
        self.size = size
        self.hidden_grid = [[WATER for _ in range(size)] for _ in range(size)]
        self.placed_ships: list[dict] = []

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    @classmethod
    def random(
        cls,
        fleet: Sequence[ShipKind] = DEFAULT_FLEET,
        size: int = _cfg.BOARD_SIZE,
        seed: Optional[int] = None,
    ) -> "Board":
        """Build a board with *fleet* placed from a generator seeded with *seed*."""
        board = cls(size)
        board.place_ships_randomly(fleet, random.Random(seed))
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from a literal layout: '.' is water, anything else a ship."""
        rows = [row.replace(" ", "") for row in rows]
        if not rows:
            raise BoardFormatError("Layout has no rows")
        size = len(rows)
        for idx, row in enumerate(rows):
            if len(row) != size:
                raise BoardFormatError(f"Row {idx} has {len(row)} cells, expected {size}")
        board = cls(size)
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                board.hidden_grid[r][c] = cell
        return board

    @classmethod
    def canned(cls) -> "Board":
        return cls.from_rows(CANNED_ROWS)

    # ------------------------------------------------------------------ #
    # Placement
    # ------------------------------------------------------------------ #
    def place_ships_randomly(
        self,
        fleet: Sequence[ShipKind] = DEFAULT_FLEET,
        rng: Optional[random.Random] = None,
        max_attempts: int = _cfg.PLACEMENT_ATTEMPTS,
    ) -> None:
        """Randomly position *fleet* on the board, retrying each ship until it fits."""
        rng = rng if rng is not None else random.Random()
        for kind in fleet:
            for _ in range(max_attempts):
                shape = orient(kind, transposed=rng.random() < 0.5)
                if shape.height > self.size or shape.width > self.size:
                    continue
                row = rng.randint(0, self.size - shape.height)
                col = rng.randint(0, self.size - shape.width)
                if self.can_place_ship(row, col, shape):
                    self.do_place_ship(row, col, shape)
                    break
            else:
                raise BoardGenerationError(
                    f"Could not place {kind.name} on a {self.size}x{self.size} board after {max_attempts} attempts"
                )
        logger.debug("Placed %d ships on %dx%d board", len(self.placed_ships), self.size, self.size)

    def can_place_ship(self, row: int, col: int, shape: OrientedShape) -> bool:
        """Return `True` if *shape* anchored at (*row*,*col*) fits and touches no other ship."""
        if row < 0 or col < 0 or row + shape.height > self.size or col + shape.width > self.size:
            return False
        for dr, dc in shape.offsets:
            for nr in range(row + dr - 1, row + dr + 2):
                for nc in range(col + dc - 1, col + dc + 2):
                    if try_get(self.hidden_grid, nr, nc, WATER) != WATER:
                        return False
        return True

    def do_place_ship(self, row: int, col: int, shape: OrientedShape) -> set[Coord]:
        """Mutating helper that writes ship cells into *hidden_grid* and returns occupied set."""
        letter = SHIP_LETTERS.get(shape.kind.name, "S")
        occupied = set()
        for dr, dc in shape.offsets:
            self.hidden_grid[row + dr][col + dc] = letter
            occupied.add((row + dr, col + dc))
        self.placed_ships.append({"name": shape.kind.name, "positions": occupied})
        return occupied

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def is_ship(self, row: int, col: int) -> bool:
        """Reveal whether (*row*,*col*) holds part of a ship."""
        return self.hidden_grid[row][col] != WATER

    def ship_cell_count(self) -> int:
        return sum(cell != WATER for line in self.hidden_grid for cell in line)
