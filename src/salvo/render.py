"""Text rendering of the observed grid, the heat map and the hidden board."""

from __future__ import annotations

from typing import List

import numpy as np

from .board import Board
from .state import CellStatus

SYMBOLS = {
    CellStatus.UNKNOWN: "*",
    CellStatus.WATER: ".",
    CellStatus.HIT: "X",
    CellStatus.SUNK: "x",
}


def _with_labels(rows: List[List[str]], width: int) -> str:
    columns = len(rows[0]) if rows else 0
    header = "   " + " ".join(f"{i:>{width}}" for i in range(1, columns + 1))
    lines = [header]
    for idx, cells in enumerate(rows):
        label = chr(ord("A") + idx)
        lines.append(f"{label:2} " + " ".join(f"{cell:>{width}}" for cell in cells))
    return "\n".join(lines)


def render_grid(observed: np.ndarray) -> str:
    """Observed grid with row letters and 1-based column numbers."""
    rows = [[SYMBOLS[CellStatus(int(v))] for v in line] for line in observed]
    return _with_labels(rows, 2)


def render_heat(heat: np.ndarray) -> str:
    rows = [[f"{v:.3f}" for v in line] for line in heat]
    return _with_labels(rows, 6)


def render_board(board: Board) -> str:
    """The hidden layout, ships shown by their letters."""
    return _with_labels([list(line) for line in board.hidden_grid], 2)
