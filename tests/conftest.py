import logging
import sys
from pathlib import Path

import pytest

# Ensure local `src` directory is importable before project is installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from salvo.board import Board  # noqa: E402

# Suppress INFO & DEBUG logs from the solver during tests
logging.basicConfig(level=logging.WARNING)


@pytest.fixture
def canned_board() -> Board:
    """The fixed 12x12 layout of the default fleet."""
    return Board.canned()


@pytest.fixture
def recorder() -> callable:
    """Listener that keeps every emitted event in ``recorder.events``."""

    class _Recorder:
        def __init__(self) -> None:
            self.events = []

        def __call__(self, ev) -> None:
            self.events.append(ev)

        def of_type(self, name: str) -> list:
            return [ev for ev in self.events if ev.type == name]

    return _Recorder()


@pytest.fixture
def layout() -> callable:
    """Factory building a Board of *size* water cells with ships at the given coords."""

    def _factory(size: int, ship_cells) -> Board:
        grid = [["." for _ in range(size)] for _ in range(size)]
        for r, c in ship_cells:
            grid[r][c] = "S"
        return Board.from_rows(["".join(line) for line in grid])

    return _factory
