"""The game loop: heat, shoot, check for a sunk ship, repeat.

The loop has two modes.  While the hit cluster is empty it is SEARCHING and
the heat map is driven by speculative placements; the first hit switches it
to FINISHING, where placements through the hits dominate the heat map until
the sink detector commits the ship and clears the cluster again.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .board import Board
from .events import Category, Event, Listener, ignore
from .fleet import DEFAULT_FLEET, ShipKind, oriented_shapes
from .heat import compute_heat, fire, select_target
from .sink import candidate_placements, commit_sink, decide
from .state import GameState, Mode, new_game

logger = logging.getLogger(__name__)

__all__ = ["GameResult", "Mode", "Outcome", "play_round", "solve"]


class Outcome(enum.Enum):
    CONTINUE = "continue"
    WON = "won"
    STUCK = "stuck"


@dataclass
class GameResult:
    outcome: Outcome
    rounds: int
    shots: int
    sunk: List[str] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WON


def play_round(state: GameState, board: Board, emit: Listener = ignore) -> Outcome:
    """Play one round on *state*, mutating it in place."""
    shapes = oriented_shapes(state.remaining)
    heat = compute_heat(state, shapes)
    emit(
        Event(
            Category.TURN,
            "round",
            {"round": state.round, "mode": state.mode, "observed": state.snapshot(), "heat": heat.copy()},
        )
    )

    target = select_target(state)
    if target is None:
        emit(
            Event(
                Category.SYSTEM,
                "stuck",
                {"round": state.round, "remaining": [kind.name for kind in state.remaining]},
            )
        )
        return Outcome.STUCK

    coord, score = target
    hit = fire(state, board, coord)
    emit(Event(Category.TURN, "shot", {"round": state.round, "coord": coord, "score": score, "hit": hit}))

    if state.cluster:
        candidates = candidate_placements(state, shapes)
        placement = decide(state.cluster, candidates)
        if placement is not None:
            flooded = commit_sink(state, placement)
            emit(
                Event(
                    Category.TURN,
                    "sunk",
                    {
                        "round": state.round,
                        "kind": placement.kind.name,
                        "cells": sorted(placement.cells),
                        "flooded": sorted(flooded),
                    },
                )
            )
        elif not candidates:
            emit(Event(Category.SYSTEM, "unexplained", {"round": state.round, "cluster": sorted(state.cluster)}))

    if not state.remaining:
        emit(Event(Category.SYSTEM, "won", {"rounds": state.round, "shots": len(state.shots)}))
        return Outcome.WON

    state.round += 1
    return Outcome.CONTINUE


def solve(
    board: Board,
    fleet: Sequence[ShipKind] = DEFAULT_FLEET,
    emit: Listener = ignore,
    max_rounds: Optional[int] = None,
    state: Optional[GameState] = None,
) -> GameResult:
    """Hunt down *fleet* on *board* and report how it went.

    Every round fires at a new cell, so a game can never need more than
    ``size * size`` rounds; hitting *max_rounds* (that bound by default) is
    reported as STUCK.
    """
    state = state if state is not None else new_game(fleet, board.size)
    limit = max_rounds if max_rounds is not None else state.size * state.size

    outcome = Outcome.CONTINUE
    while outcome is Outcome.CONTINUE:
        if state.round > limit:
            logger.warning("Giving up after %d rounds", limit)
            emit(Event(Category.SYSTEM, "stuck", {"round": state.round, "remaining": [k.name for k in state.remaining]}))
            outcome = Outcome.STUCK
            break
        outcome = play_round(state, board, emit)

    rounds = state.round if outcome is Outcome.WON else state.round - 1
    return GameResult(outcome=outcome, rounds=rounds, shots=len(state.shots), sunk=list(state.sunk))
