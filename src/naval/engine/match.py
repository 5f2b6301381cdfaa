"""Turn-strict match between two combatants."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from naval.telemetry import get_meter, get_tracer, record_match_metric

from .fleet import BoardPhase, ShotReport

if TYPE_CHECKING:
    from naval.combatants import Combatant

logger = logging.getLogger(__name__)
tracer = get_tracer("naval.engine.match")
meter = get_meter("naval.engine.match")

TURN_COUNTER = meter.create_counter(
    "naval_engine_turns",
    unit="1",
    description="Turns played in a match",
)


class MatchPhase(Enum):
    """High-level lifecycle of a match."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class TurnReport:
    """What happened on one turn."""

    number: int
    shooter: str
    target_owner: str
    shot: ShotReport
    fleet_destroyed: bool


class Match:
    """Alternates turns between two combatants until one fleet is destroyed.

    ``first`` moves first. Each combatant fires only at the other's board, and
    no shot is fired at a defeated board.
    """

    def __init__(self, first: Combatant, second: Combatant) -> None:
        if first.board is second.board:
            raise ValueError("Combatants must own separate boards.")
        self.combatants: tuple[Combatant, Combatant] = (first, second)
        self.phase: MatchPhase = MatchPhase.SETUP
        self.current: Combatant = first
        self.winner: Combatant | None = None
        self.turns = 0
        self._started_at: float | None = None

    def opponent_of(self, combatant: Combatant) -> Combatant:
        first, second = self.combatants
        if combatant is first:
            return second
        if combatant is second:
            return first
        raise ValueError(f"{combatant.name} is not part of this match.")

    def setup(self) -> None:
        """Let each combatant place its own fleet, then open fire.

        A board whose fleet is already fully placed is left as it is.
        """
        if self.phase is not MatchPhase.SETUP:
            raise RuntimeError("Match has already been set up.")
        with tracer.start_as_current_span("match.setup"):
            for combatant in self.combatants:
                if combatant.board.phase is BoardPhase.SETUP:
                    combatant.configure_fleet(combatant.board)
                if combatant.board.phase is BoardPhase.SETUP:
                    raise RuntimeError(f"{combatant.name} did not place every vessel.")
            self.phase = MatchPhase.IN_PROGRESS
            self.current = self.combatants[0]
            self._started_at = time.perf_counter()
            logger.info(
                "match_setup_complete",
                extra={"first": self.current.name, "phase": self.phase.value},
            )

    def play_turn(self) -> TurnReport:
        """Let the current combatant fire once and advance the match."""
        if self.phase is not MatchPhase.IN_PROGRESS:
            raise RuntimeError("Match is not in progress.")

        shooter = self.current
        defender = self.opponent_of(shooter)
        target_board = defender.board
        with tracer.start_as_current_span("match.play_turn") as span:
            span.set_attribute("shooter", shooter.name)
            span.set_attribute("turn", self.turns + 1)

            # Combatants only ever return untargeted, in-bounds cells; anything
            # else is a combatant bug.
            target = shooter.choose_target(target_board)
            shot = target_board.receive_shot(target.row, target.col)
            if not shot.accepted:
                raise RuntimeError(
                    f"{shooter.name} chose an unusable target ({target.row}, {target.col}): "
                    f"{shot.outcome.value}."
                )

            self.turns += 1
            destroyed = target_board.phase is BoardPhase.DEFEATED
            span.set_attribute("shot.outcome", shot.outcome.value)
            TURN_COUNTER.add(1, attributes={"shooter": shooter.name, "outcome": shot.outcome.value})

            if destroyed:
                self.winner = shooter
                self.phase = MatchPhase.FINISHED
                span.set_attribute("match.winner", shooter.name)
                self._record_finish()
            else:
                self.current = defender

            return TurnReport(
                number=self.turns,
                shooter=shooter.name,
                target_owner=target_board.owner,
                shot=shot,
                fleet_destroyed=destroyed,
            )

    def play(self, on_turn: Callable[[TurnReport], None] | None = None) -> Combatant:
        """Run turns until a fleet is destroyed and return the winner."""
        if self.phase is MatchPhase.SETUP:
            self.setup()
        while self.phase is MatchPhase.IN_PROGRESS:
            report = self.play_turn()
            if on_turn is not None:
                on_turn(report)
        assert self.winner is not None
        return self.winner

    def _record_finish(self) -> None:
        duration = time.perf_counter() - self._started_at if self._started_at else 0.0
        winner = self.winner.name if self.winner else "unknown"
        record_match_metric("naval_match_completed_total", 1, {"winner": winner})
        logger.info(
            "match_finished",
            extra={"winner": winner, "turns": self.turns, "duration_s": round(duration, 3)},
        )
