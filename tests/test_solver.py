"""End-to-end games through the round loop."""

from __future__ import annotations

import logging

import numpy as np

from salvo.board import Board
from salvo.fleet import DEFAULT_FLEET, FIVE, THREE, TWO, fleet_cell_count
from salvo.heat import fire
from salvo.reporter import EventReporter
from salvo.solver import Mode, Outcome, play_round, solve
from salvo.state import CellStatus, new_game


def _touching(row: int, col: int, size: int):
    return [
        (row + dr, col + dc)
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if (dr, dc) != (0, 0) and 0 <= row + dr < size and 0 <= col + dc < size
    ]


def _play_canned(board: Board, recorder):
    state = new_game(DEFAULT_FLEET, board.size)
    result = solve(board, DEFAULT_FLEET, emit=recorder, state=state)
    return state, result


def test_canned_board_is_won_within_bound(canned_board, recorder) -> None:
    state, result = _play_canned(canned_board, recorder)

    assert result.outcome is Outcome.WON
    assert result.won
    assert result.rounds <= canned_board.size ** 2
    assert result.rounds == result.shots == len(state.shots)
    assert sorted(result.sunk) == sorted(kind.name for kind in DEFAULT_FLEET)
    assert state.remaining == []
    assert state.cluster == set()

    won = recorder.of_type("won")
    assert len(won) == 1 and won[0].payload["rounds"] == result.rounds


def test_fleet_conservation(canned_board, recorder) -> None:
    state, _ = _play_canned(canned_board, recorder)
    assert state.count(CellStatus.SUNK) == fleet_cell_count(DEFAULT_FLEET)
    assert state.count(CellStatus.HIT) == 0
    # every SUNK cell really is a ship cell
    for r, c in zip(*np.nonzero(state.observed == CellStatus.SUNK)):
        assert canned_board.is_ship(int(r), int(c))


def test_knowledge_never_regresses(canned_board, recorder) -> None:
    state, _ = _play_canned(canned_board, recorder)
    snapshots = [ev.payload["observed"] for ev in recorder.of_type("round")] + [state.observed]

    allowed = {
        CellStatus.UNKNOWN: {CellStatus.UNKNOWN, CellStatus.WATER, CellStatus.HIT, CellStatus.SUNK},
        CellStatus.WATER: {CellStatus.WATER},
        CellStatus.HIT: {CellStatus.HIT, CellStatus.SUNK},
        CellStatus.SUNK: {CellStatus.SUNK},
    }
    for before, after in zip(snapshots, snapshots[1:]):
        for (r, c), prev in np.ndenumerate(before):
            assert CellStatus(int(after[r, c])) in allowed[CellStatus(int(prev))], (r, c)


def test_never_fires_at_a_known_cell(canned_board, recorder) -> None:
    state, _ = _play_canned(canned_board, recorder)
    assert len(set(state.shots)) == len(state.shots)

    rounds = recorder.of_type("round")
    shots = recorder.of_type("shot")
    assert len(rounds) == len(shots)
    for rnd, shot in zip(rounds, shots):
        r, c = shot.payload["coord"]
        assert rnd.payload["observed"][r, c] == CellStatus.UNKNOWN
        assert shot.payload["score"] > 0


def test_sunk_ships_and_their_perimeter(canned_board, recorder) -> None:
    state, _ = _play_canned(canned_board, recorder)
    by_round = {ev.payload["round"]: ev for ev in recorder.of_type("round")}
    shot_by_round = {ev.payload["round"]: ev.payload["coord"] for ev in recorder.of_type("shot")}

    sunk_events = recorder.of_type("sunk")
    assert len(sunk_events) == len(DEFAULT_FLEET)
    for ev in sunk_events:
        rnd = ev.payload["round"]
        before = by_round[rnd].payload["observed"]
        for r, c in ev.payload["cells"]:
            # hit earlier, or hit by this round's shot
            assert before[r, c] == CellStatus.HIT or shot_by_round[rnd] == (r, c)
            assert state.observed[r, c] == CellStatus.SUNK
            for nr, nc in _touching(r, c, state.size):
                assert state.observed[nr, nc] != CellStatus.UNKNOWN
        for r, c in ev.payload["flooded"]:
            assert before[r, c] == CellStatus.UNKNOWN
            assert not canned_board.is_ship(r, c)


def test_heat_is_fresh_every_round(canned_board, recorder) -> None:
    _play_canned(canned_board, recorder)
    for ev in recorder.of_type("round"):
        heat, observed = ev.payload["heat"], ev.payload["observed"]
        assert np.all(heat >= 0.0)
        blocked = (observed == CellStatus.WATER) | (observed == CellStatus.SUNK)
        assert np.all(heat[blocked] == 0.0)


def test_modes_follow_the_hit_cluster(canned_board, recorder) -> None:
    _play_canned(canned_board, recorder)
    rounds = recorder.of_type("round")
    shots = {ev.payload["round"]: ev.payload["hit"] for ev in recorder.of_type("shot")}
    sunk_rounds = {ev.payload["round"] for ev in recorder.of_type("sunk")}

    assert rounds[0].payload["mode"] is Mode.SEARCHING
    for prev, cur in zip(rounds, rounds[1:]):
        n = prev.payload["round"]
        if n in sunk_rounds:
            assert cur.payload["mode"] is Mode.SEARCHING
        elif shots[n]:
            assert cur.payload["mode"] is Mode.FINISHING
        else:
            assert cur.payload["mode"] is prev.payload["mode"]


def test_finishing_the_corner_ship(layout, recorder) -> None:
    board = layout(12, [(0, 0), (0, 1)])
    state = new_game([TWO], size=12)
    fire(state, board, (0, 0))
    assert state.mode is Mode.FINISHING

    outcome = play_round(state, board, recorder)
    assert outcome is Outcome.WON
    assert recorder.of_type("shot")[0].payload["coord"] == (0, 1)
    sunk = recorder.of_type("sunk")[0].payload
    assert sunk["kind"] == "TWO"
    assert sunk["cells"] == [(0, 0), (0, 1)]
    assert sunk["flooded"] == [(0, 2), (1, 0), (1, 1), (1, 2)]
    assert state.mode is Mode.SEARCHING


def test_stuck_when_no_ship_fits(layout, recorder) -> None:
    board = layout(4, [(0, 0)])
    result = solve(board, [FIVE], emit=recorder)
    assert result.outcome is Outcome.STUCK
    assert result.rounds == 0
    assert result.shots == 0
    stuck = recorder.of_type("stuck")
    assert len(stuck) == 1 and stuck[0].payload["remaining"] == ["FIVE"]
    assert recorder.of_type("won") == []


def test_round_limit_reports_stuck(canned_board, recorder) -> None:
    result = solve(canned_board, DEFAULT_FLEET, emit=recorder, max_rounds=3)
    assert result.outcome is Outcome.STUCK
    assert result.rounds == 3
    assert result.shots == 3
    assert len(recorder.of_type("stuck")) == 1


def test_single_ship_board_is_won(layout) -> None:
    board = layout(6, [(4, 1), (4, 2), (4, 3)])

    result = solve(board, [THREE])
    assert result.won
    assert result.sunk == ["THREE"]
    assert result.rounds <= 36


def test_hits_on_two_ships_are_reported_and_end_stuck(layout, recorder, caplog) -> None:
    """A cluster spanning two ships fits no single placement; nothing is ever sunk."""
    board = layout(6, [(0, 0), (0, 1), (5, 4), (5, 5)])
    state = new_game([TWO, TWO], size=6)
    fire(state, board, (0, 0))
    fire(state, board, (5, 5))
    assert state.cluster == {(0, 0), (5, 5)}

    reporter = EventReporter(out=lambda line: None)

    def emit(ev) -> None:
        recorder(ev)
        reporter(ev)

    with caplog.at_level(logging.WARNING, logger="salvo.reporter"):
        result = solve(board, [TWO, TWO], emit=emit, state=state)

    assert result.outcome is Outcome.STUCK
    assert not result.won
    assert result.sunk == []
    assert recorder.of_type("won") == []
    assert recorder.of_type("sunk") == []
    assert len(recorder.of_type("stuck")) == 1

    unexplained = recorder.of_type("unexplained")
    assert unexplained
    assert unexplained[0].payload["cluster"][0] == (0, 0)
    assert all({(0, 0), (5, 5)} <= set(ev.payload["cluster"]) for ev in unexplained)
    assert "do not fit any remaining ship" in caplog.text
    assert any(rec.levelno == logging.WARNING and rec.name == "salvo.reporter" for rec in caplog.records)
    # every round fired at a fresh cell
    assert len(set(state.shots)) == len(state.shots) <= 36
