import numpy as np

from salvo.coord_utils import format_coord, try_get


def test_format_coord() -> None:
    assert format_coord(0, 0) == "A1"
    assert format_coord(11, 11) == "L12"
    assert format_coord(7, 3) == "H4"


def test_try_get_inside_and_outside() -> None:
    grid = [["a", "b"], ["c", "d"]]
    assert try_get(grid, 1, 0) == "c"
    assert try_get(grid, 2, 0) is None
    assert try_get(grid, 0, 2, "x") == "x"
    # negative indices do not wrap around
    assert try_get(grid, -1, 0) is None
    assert try_get(grid, 0, -1) is None


def test_try_get_on_numpy_grid() -> None:
    grid = np.arange(9).reshape(3, 3)
    assert try_get(grid, 2, 2) == 8
    assert try_get(grid, 3, 0) is None
