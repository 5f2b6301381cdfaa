"""Human-driven combatant fed by a line-oriented input source."""

from __future__ import annotations

import logging
import re
from typing import Callable, Protocol

from naval.engine.errors import Decline
from naval.engine.fleet import FleetBoard
from naval.engine.vessel import Coordinate, Orientation, Vessel

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,]+")

DECLINE_MESSAGES = {
    Decline.INVALID_ORIENTATION: "Orientation must be H (horizontal) or V (vertical).",
    Decline.OUT_OF_BOUNDS: "That position is outside the board. Try again.",
    Decline.COLLISION: "That position overlaps another vessel. Try again.",
    Decline.ALREADY_TARGETED: "You already fired at that position. Try again.",
}


class InputSource(Protocol):
    """Supplies one line of text per request, blocking until it arrives."""

    def read_line(self, prompt: str) -> str:
        ...


def _tokens(text: str) -> list[str]:
    return [token for token in _SEPARATORS.split(text.strip()) if token]


def parse_target(text: str) -> Coordinate:
    """Parse ``"<row> <col>"`` into a coordinate."""
    parts = _tokens(text)
    if len(parts) != 2:
        raise ValueError("Enter a row and a column, e.g. '3 7'.")
    try:
        row, col = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError("Row and column must be whole numbers.") from exc
    return Coordinate(row, col)


def parse_placement(text: str) -> tuple[Coordinate, Orientation]:
    """Parse ``"<row> <col> <H|V>"`` into an origin and orientation."""
    parts = _tokens(text)
    if len(parts) != 3:
        raise ValueError("Enter a row, a column and an orientation, e.g. '2 4 H'.")
    origin = parse_target(" ".join(parts[:2]))
    orientation = Orientation.parse(parts[2])
    if orientation is None:
        raise ValueError(DECLINE_MESSAGES[Decline.INVALID_ORIENTATION])
    return origin, orientation


class InteractiveCombatant:
    """Asks an input source for every decision and re-asks until it is legal."""

    def __init__(
        self,
        name: str,
        board: FleetBoard,
        input_source: InputSource,
        notify: Callable[[str], None] = print,
    ) -> None:
        self.name = name
        self.board = board
        self.input_source = input_source
        self.notify = notify

    def configure_fleet(self, board: FleetBoard) -> None:
        self.notify(f"--- {self.name}: place your vessels ---")
        board.place_all_vessels(self)
        self.notify(f"All of {self.name}'s vessels are placed.")

    def propose(
        self, board: FleetBoard, vessel: Vessel, previous: Decline | None
    ) -> tuple[int, int, Orientation]:
        if previous is not None:
            self.notify(DECLINE_MESSAGES[previous])
        while True:
            self.notify(str(board.render(hide_vessels=False)))
            raw = self.input_source.read_line(
                f"Place your {vessel.name} (length {vessel.length}) as 'row col H|V': "
            )
            try:
                origin, orientation = parse_placement(raw)
            except ValueError as exc:
                self.notify(f"Invalid input: {exc}")
                continue
            if not board.grid.in_bounds(origin.row, origin.col):
                self.notify(DECLINE_MESSAGES[Decline.OUT_OF_BOUNDS])
                continue
            return origin.row, origin.col, orientation

    def choose_target(self, opponent_board: FleetBoard) -> Coordinate:
        while True:
            raw = self.input_source.read_line(f"{self.name}, enter a target as 'row col': ")
            try:
                target = parse_target(raw)
            except ValueError as exc:
                self.notify(f"Invalid input: {exc}")
                continue
            if not opponent_board.grid.in_bounds(target.row, target.col):
                self.notify(DECLINE_MESSAGES[Decline.OUT_OF_BOUNDS])
                continue
            if opponent_board.is_targeted(target.row, target.col):
                self.notify(DECLINE_MESSAGES[Decline.ALREADY_TARGETED])
                continue
            logger.debug(
                "interactive_target_chosen",
                extra={"combatant": self.name, "row": target.row, "col": target.col},
            )
            return target
