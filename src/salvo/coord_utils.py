from typing import Any, Optional, Sequence, Tuple

Coord = Tuple[int, int]


def format_coord(row: int, col: int) -> str:
    """
    Convert zero-based (row, col) to coordinate string like 'A1'.
    """
    return f"{chr(ord('A') + row)}{col + 1}"


def try_get(grid: Sequence[Sequence[Any]], row: int, col: int, default: Optional[Any] = None) -> Any:
    """Return ``grid[row][col]``, or *default* when the cell lies off the grid.

    Negative indices count as off the grid; nothing wraps around.
    """
    if row < 0 or col < 0 or row >= len(grid):
        return default
    line = grid[row]
    if col >= len(line):
        return default
    return line[col]
