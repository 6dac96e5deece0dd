"""Ship catalog and orientation helpers.

Every ship kind is a plain record: a name, the cells it occupies relative
to its anchor (top-left corner of its bounding box) and that bounding box
as ``(height, width)``.  Orientation is derived, never stored: the
transposed orientation swaps every offset pair and the box dimensions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

Offset = Tuple[int, int]


@dataclass(frozen=True)
class ShipKind:
    name: str
    offsets: Tuple[Offset, ...]
    size: Tuple[int, int]  # (height, width) in the default orientation


@dataclass(frozen=True)
class OrientedShape:
    kind: ShipKind
    transposed: bool
    height: int
    width: int
    offsets: Tuple[Offset, ...]


def _line(name: str, length: int) -> ShipKind:
    return ShipKind(name, tuple((0, c) for c in range(length)), (1, length))


# Full middle row plus arms above and below columns 1 and 3.
CARRIER = ShipKind(
    "CARRIER",
    (
        (1, 0), (1, 1), (1, 2), (1, 3), (1, 4),
        (0, 1), (2, 1), (0, 3), (2, 3),
    ),
    (3, 5),
)
FIVE = _line("FIVE", 5)
FOUR = _line("FOUR", 4)
THREE = _line("THREE", 3)
TWO = _line("TWO", 2)

# Catalog order is also the order shapes are scanned in.
CATALOG: Tuple[ShipKind, ...] = (CARRIER, FIVE, FOUR, THREE, TWO)

DEFAULT_FLEET: Tuple[ShipKind, ...] = (CARRIER, FIVE, FOUR, THREE, THREE, TWO)


def kind_by_name(name: str) -> ShipKind:
    """Look up a catalog entry by (case-insensitive) name."""
    wanted = name.strip().upper()
    for kind in CATALOG:
        if kind.name == wanted:
            return kind
    raise ValueError(f"Unknown ship kind: {name!r} (expected one of {', '.join(k.name for k in CATALOG)})")


def orient(kind: ShipKind, transposed: bool) -> OrientedShape:
    height, width = kind.size
    if not transposed:
        return OrientedShape(kind, False, height, width, kind.offsets)
    return OrientedShape(kind, True, width, height, tuple((c, r) for r, c in kind.offsets))


def oriented_shapes(kinds: Iterable[ShipKind]) -> List[OrientedShape]:
    """Return both orientations of every *distinct* kind in *kinds*.

    Multiplicity is ignored: two THREEs in the fleet still contribute one
    THREE per orientation.  Transposed orientations come first, each group
    in catalog order.  An orientation covering exactly the same offsets as
    one already listed for that kind is skipped so a shape symmetric under
    transposition is not counted twice.
    """
    kinds = list(kinds)
    distinct = [kind for kind in CATALOG if kind in kinds]
    # kinds built outside the catalog keep first-seen order after it
    distinct += [kind for kind in dict.fromkeys(kinds) if kind not in CATALOG]

    shapes: List[OrientedShape] = []
    seen: set[tuple[ShipKind, frozenset[Offset]]] = set()
    for transposed in (True, False):
        for kind in distinct:
            shape = orient(kind, transposed)
            key = (kind, frozenset(shape.offsets))
            if key in seen:
                continue
            seen.add(key)
            shapes.append(shape)
    return shapes


def cell_count(kind: ShipKind) -> int:
    return len(kind.offsets)


def fleet_cell_count(fleet: Sequence[ShipKind]) -> int:
    """Total number of ship cells across *fleet* (duplicates counted)."""
    return sum(cell_count(kind) for kind in fleet)
