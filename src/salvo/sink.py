"""Sunk-ship detection.

A ship is only committed as sunk when the open hit cluster can be explained
by exactly one placement of one remaining kind *and* that placement has
already been hit on every cell.  Committing floods the ship's unknown
surroundings with water, since ships never touch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Set

from .coord_utils import Coord, format_coord, try_get
from .fleet import OrientedShape, ShipKind
from .heat import anchors
from .state import CellStatus, GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    kind: ShipKind
    cells: FrozenSet[Coord]


def candidate_placements(state: GameState, shapes: Sequence[OrientedShape]) -> List[Placement]:
    """Every placement covering the whole cluster and no WATER/SUNK cell.

    Identical (kind, cells) pairs reached through different orientations are
    reported once, in order of first discovery.
    """
    observed = state.observed.tolist()
    cluster = state.cluster
    found: dict[Placement, None] = {}

    for shape in shapes:
        for row, col in anchors(shape, state.size):
            cells = frozenset((row + dr, col + dc) for dr, dc in shape.offsets)
            if not cluster <= cells:
                continue
            if any(observed[r][c] in (CellStatus.WATER, CellStatus.SUNK) for r, c in cells):
                continue
            found.setdefault(Placement(shape.kind, cells))
    return list(found)


def decide(cluster: Set[Coord], candidates: Sequence[Placement]) -> Optional[Placement]:
    """The single candidate already hit on every cell, if there is one."""
    if not candidates:
        logger.debug(
            "Hit cluster %s fits no remaining ship; more than one ship may be hit",
            sorted(format_coord(r, c) for r, c in cluster),
        )
        return None
    if len(candidates) == 1 and len(cluster) == len(candidates[0].cells):
        return candidates[0]
    logger.debug("%d candidate placements for %d hits", len(candidates), len(cluster))
    return None


def commit_sink(state: GameState, placement: Placement) -> set[Coord]:
    """Mark *placement* sunk, flood its perimeter and drop the kind from the fleet.

    Returns the cells that were flooded to WATER.
    """
    observed = state.observed
    flooded: set[Coord] = set()
    for r, c in placement.cells:
        observed[r, c] = CellStatus.SUNK
    for r, c in placement.cells:
        for nr in range(r - 1, r + 2):
            for nc in range(c - 1, c + 2):
                if try_get(observed, nr, nc) == CellStatus.UNKNOWN:
                    observed[nr, nc] = CellStatus.WATER
                    flooded.add((nr, nc))

    state.remaining.remove(placement.kind)
    state.cluster.clear()
    state.sunk.append(placement.kind.name)
    return flooded
