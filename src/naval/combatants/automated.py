"""Computer-controlled combatant choosing uniformly among legal moves."""

from __future__ import annotations

import logging
import random

from naval.engine.errors import Decline
from naval.engine.fleet import FleetBoard
from naval.engine.vessel import Coordinate, Orientation, Vessel

logger = logging.getLogger(__name__)


class AutomatedCombatant:
    """Picks placements and targets from explicit candidate lists.

    Every choice is drawn from the full set of currently legal options, so a
    choice always terminates while at least one option remains.
    """

    def __init__(self, name: str, board: FleetBoard, rng: random.Random | None = None) -> None:
        self.name = name
        self.board = board
        self._rng = rng if rng is not None else random.Random()

    def configure_fleet(self, board: FleetBoard) -> None:
        board.place_all_vessels(self)
        logger.info("automated_fleet_configured", extra={"combatant": self.name})

    def propose(
        self, board: FleetBoard, vessel: Vessel, previous: Decline | None
    ) -> tuple[int, int, Orientation]:
        candidates = board.grid.legal_placements(vessel.length)
        if not candidates:
            raise RuntimeError(
                f"No legal position left for {vessel.name} on {board.owner}'s board."
            )
        return self._rng.choice(candidates)

    def choose_target(self, opponent_board: FleetBoard) -> Coordinate:
        candidates = opponent_board.untargeted()
        if not candidates:
            raise RuntimeError(f"Every cell of {opponent_board.owner}'s board has been targeted.")
        target = self._rng.choice(candidates)
        logger.debug(
            "automated_target_chosen",
            extra={"combatant": self.name, "row": target.row, "col": target.col},
        )
        return target
