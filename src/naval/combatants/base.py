"""Capability interface shared by every combatant."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from naval.engine.fleet import FleetBoard
from naval.engine.vessel import Coordinate


@runtime_checkable
class Combatant(Protocol):
    """One side of a match: places its own fleet and picks shots at the other."""

    name: str
    board: FleetBoard

    def configure_fleet(self, board: FleetBoard) -> None:
        """Place every vessel of ``board``'s catalog."""
        ...

    def choose_target(self, opponent_board: FleetBoard) -> Coordinate:
        """Return an in-bounds coordinate not yet fired at on ``opponent_board``."""
        ...
