"""Translate game-loop events into the lines a run prints.

The reporter lives *outside* the solver so the loop stays free of output
formatting; it is also straight-forward to unit-test by feeding synthetic
Event objects.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .coord_utils import format_coord
from .events import Category, Event
from .render import render_grid, render_heat

logger = logging.getLogger(__name__)


class EventReporter:
    """Subscriber that converts `Event` → log lines (and optional grid dumps)."""

    def __init__(
        self,
        *,
        show_grid: bool = False,
        show_heat: bool = False,
        out: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.show_grid = show_grid
        self.show_heat = show_heat
        self._out = out if out is not None else logger.info

    # ------------------------------------------------------------------
    # Public dispatch entry
    # ------------------------------------------------------------------
    def __call__(self, ev: Event) -> None:  # the solver calls emit(event)
        try:
            self.dispatch(ev)
        except Exception:  # noqa: BLE001
            logger.exception("Reporting failed for %s", ev.type)

    def dispatch(self, ev: Event) -> None:
        if ev.category is Category.TURN:
            self._handle_turn(ev)
        elif ev.category is Category.SYSTEM:
            self._handle_system(ev)
        else:  # pragma: no cover – unknown category
            logger.debug("Ignoring event %s", ev)

    # ------------------------------------------------------------------
    # Category handlers
    # ------------------------------------------------------------------
    def _handle_turn(self, ev: Event) -> None:
        p = ev.payload
        if ev.type == "round":
            logger.debug("round %d (%s)", p["round"], p["mode"].value)
            if self.show_grid:
                self._out(f"round {p['round']}\n{render_grid(p['observed'])}")
            if self.show_heat:
                self._out(render_heat(p["heat"]))
        elif ev.type == "shot":
            r, c = p["coord"]
            self._out(
                f"The biggest heat is {p['score']:.3f}, row:{r}, col:{c} ({format_coord(r, c)}) "
                f"-> {'HIT' if p['hit'] else 'miss'}"
            )
        elif ev.type == "sunk":
            self._out(f"Sinking ship {p['kind']}")
        else:
            logger.debug("Unhandled TURN event: %s", ev.type)

    def _handle_system(self, ev: Event) -> None:
        p = ev.payload
        if ev.type == "won":
            self._out(f"Game won in round {p['rounds']}.")
        elif ev.type == "stuck":
            self._out(f"No more moves. Stuck in round {p['round']} with {', '.join(p['remaining']) or 'no ships'} left.")
        elif ev.type == "unexplained":
            labels = ", ".join(format_coord(r, c) for r, c in p["cluster"])
            logger.warning("Hits %s do not fit any remaining ship", labels)
        else:
            logger.debug("Unhandled SYSTEM event: %s", ev.type)
