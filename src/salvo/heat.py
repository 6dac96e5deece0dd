"""Heat map scoring, target selection and firing.

The heat of a cell is the sum, over every way a remaining ship could still
lie on the board, of ``HEAT_BASE * HEAT_HIT_MULTIPLIER**k`` for each
placement covering that cell, where *k* is the number of confirmed hits the
placement overlaps.  A placement laid over even one hit therefore outweighs
a handful of speculative ones, which keeps the solver finishing the ship it
has found before it goes looking for the next one.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from . import config as _cfg
from .board import Board
from .coord_utils import Coord, format_coord
from .fleet import OrientedShape
from .state import CellStatus, GameState

logger = logging.getLogger(__name__)

_BLOCKED = (CellStatus.WATER, CellStatus.SUNK)


def anchors(shape: OrientedShape, size: int) -> Iterator[Coord]:
    """Every anchor at which *shape*'s bounding box lies fully on the grid."""
    for row in range(size - shape.height + 1):
        for col in range(size - shape.width + 1):
            yield row, col


def compute_heat(state: GameState, shapes: Sequence[OrientedShape]) -> np.ndarray:
    """Recompute ``state.heat`` from scratch and return it."""
    # scan plain lists, convert once at the end
    observed = state.observed.tolist()
    heat = [[0.0] * state.size for _ in range(state.size)]

    for shape in shapes:
        for row, col in anchors(shape, state.size):
            possible = True
            hits = 0
            for dr, dc in shape.offsets:
                cell = observed[row + dr][col + dc]
                if cell in _BLOCKED:
                    possible = False
                    break
                if cell == CellStatus.HIT:
                    hits += 1
            if not possible:
                continue
            weight = _cfg.HEAT_BASE * _cfg.HEAT_HIT_MULTIPLIER ** hits
            for dr, dc in shape.offsets:
                heat[row + dr][col + dc] += weight

    state.heat = np.array(heat, dtype=np.float64)
    return state.heat


def select_target(state: GameState) -> Optional[Tuple[Coord, float]]:
    """Pick the hottest UNKNOWN cell, first in row-major order on ties.

    Returns ``None`` when no UNKNOWN cell has a positive score.
    """
    best: Optional[Coord] = None
    best_score = 0.0
    for row in range(state.size):
        for col in range(state.size):
            if state.observed[row, col] != CellStatus.UNKNOWN:
                continue
            score = float(state.heat[row, col])
            if score > best_score:
                best_score = score
                best = (row, col)
    if best is None:
        return None
    return best, best_score


def fire(state: GameState, board: Board, coord: Coord) -> bool:
    """Shoot at *coord*, record the result and return True on a hit."""
    row, col = coord
    if state.observed[row, col] != CellStatus.UNKNOWN:
        raise ValueError(f"{format_coord(row, col)} has already been resolved")

    hit = board.is_ship(row, col)
    state.observed[row, col] = CellStatus.HIT if hit else CellStatus.WATER
    state.shots.append(coord)
    if hit:
        state.cluster.add(coord)
    logger.debug("fire %s -> %s", format_coord(row, col), "hit" if hit else "miss")
    return hit
