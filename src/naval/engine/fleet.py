"""One side's grid and fleet: placement, shot resolution and fleet status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from naval.telemetry import get_meter, get_tracer

from .errors import Decline, PlacementIncompleteError
from .grid import (
    DEFAULT_SIZE,
    CellState,
    GridView,
    OccupancyGrid,
    PlacementResult,
    ShotOutcome,
)
from .vessel import FLEET_CATALOG, Coordinate, Orientation, Vessel

logger = logging.getLogger(__name__)
tracer = get_tracer("naval.engine.fleet")
meter = get_meter("naval.engine.fleet")

PLACEMENT_COUNTER = meter.create_counter(
    "naval_engine_vessel_placements",
    unit="1",
    description="Number of attempted vessel placements",
)

SHOT_COUNTER = meter.create_counter(
    "naval_engine_shots",
    unit="1",
    description="Shots received by a fleet board",
)


class BoardPhase(Enum):
    """Lifecycle of a fleet board."""

    SETUP = "setup"
    ACTIVE = "active"
    DEFEATED = "defeated"


class PlacementStrategy(Protocol):
    """Supplies candidate positions while a fleet is being placed."""

    def propose(
        self, board: FleetBoard, vessel: Vessel, previous: Decline | None
    ) -> tuple[int, int, Orientation | str]:
        """Return ``(row, col, orientation)`` for ``vessel``.

        ``previous`` is the reason the last candidate for this vessel was
        declined, or ``None`` on the first request.
        """
        ...


@dataclass(frozen=True)
class ShotReport:
    """Composite result of a shot against a fleet board.

    ``vessel_name`` is the struck vessel on every hit; ``sunk`` is true only for
    the hit that destroyed it.
    """

    outcome: ShotOutcome
    coordinate: Coordinate
    vessel_name: str | None = None
    sunk: bool = False

    @property
    def hit(self) -> bool:
        return self.outcome is ShotOutcome.HIT

    @property
    def accepted(self) -> bool:
        return self.outcome in (ShotOutcome.HIT, ShotOutcome.MISS)


@dataclass(frozen=True)
class VesselStatus:
    name: str
    length: int
    remaining: int
    destroyed: bool


class FleetBoard:
    """Owns one occupancy grid and the vessels placed on it."""

    def __init__(
        self,
        owner: str = "unknown",
        size: int = DEFAULT_SIZE,
        catalog: Iterable[tuple[str, int]] = FLEET_CATALOG,
    ) -> None:
        self.owner = owner
        self.grid = OccupancyGrid(size)
        self._vessels: dict[str, Vessel] = {}
        for vessel_name, length in catalog:
            if vessel_name in self._vessels:
                raise ValueError(f"Duplicate vessel name in catalog: {vessel_name!r}.")
            self._vessels[vessel_name] = Vessel(vessel_name, length)
        if not self._vessels:
            raise ValueError("A fleet needs at least one vessel.")

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def vessels(self) -> list[Vessel]:
        """Vessels in catalog order."""
        return list(self._vessels.values())

    def vessel(self, vessel_name: str) -> Vessel:
        return self._vessels[vessel_name]

    @property
    def phase(self) -> BoardPhase:
        if not all(vessel.is_placed() for vessel in self._vessels.values()):
            return BoardPhase.SETUP
        if self.is_fleet_destroyed():
            return BoardPhase.DEFEATED
        return BoardPhase.ACTIVE

    def pending_vessels(self) -> list[Vessel]:
        return [vessel for vessel in self._vessels.values() if not vessel.is_placed()]

    def place_vessel(
        self, vessel_name: str, row: int, col: int, orientation: Orientation | str
    ) -> PlacementResult:
        """Try to place one catalog vessel; the grid is untouched on decline."""
        vessel = self._vessels[vessel_name]
        with tracer.start_as_current_span("fleet.place_vessel") as span:
            span.set_attribute("vessel.name", vessel.name)
            span.set_attribute("vessel.length", vessel.length)
            span.set_attribute("origin.row", row)
            span.set_attribute("origin.col", col)
            span.set_attribute("board.owner", self.owner)
            if vessel.is_placed():
                raise ValueError(f"{vessel.name} is already placed on {self.owner}'s board.")

            result = self.grid.place(vessel.name, row, col, orientation, vessel.length)
            if result.accepted:
                vessel.assign_coordinates(result.coordinates)
                PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
                logger.info(
                    "vessel_placed",
                    extra={
                        "owner": self.owner,
                        "vessel": vessel.name,
                        "orientation": Orientation.parse(orientation).name,
                        "row": row,
                        "col": col,
                    },
                )
                return result

            span.set_attribute("placement.decline", result.decline.value)
            PLACEMENT_COUNTER.add(
                1, attributes={"result": result.decline.value, "owner": self.owner}
            )
            logger.debug(
                "vessel_placement_declined",
                extra={
                    "owner": self.owner,
                    "vessel": vessel.name,
                    "reason": result.decline.value,
                    "row": row,
                    "col": col,
                },
            )
            return result

    def place_all_vessels(self, strategy: PlacementStrategy) -> None:
        """Place every unplaced vessel in catalog order, retrying declined candidates."""
        with tracer.start_as_current_span("fleet.place_all_vessels") as span:
            span.set_attribute("board.owner", self.owner)
            for vessel in self.pending_vessels():
                previous: Decline | None = None
                attempts = 0
                while True:
                    row, col, orientation = strategy.propose(self, vessel, previous)
                    attempts += 1
                    result = self.place_vessel(vessel.name, row, col, orientation)
                    if result.accepted:
                        break
                    previous = result.decline
                logger.debug(
                    "vessel_placement_attempts",
                    extra={"owner": self.owner, "vessel": vessel.name, "attempts": attempts},
                )
            logger.info("fleet_placed", extra={"owner": self.owner})

    def receive_shot(self, row: int, col: int) -> ShotReport:
        """Resolve a shot and route any damage to the vessel occupying the cell.

        The board must have left SETUP. Firing at a DEFEATED board is the
        caller's mistake to avoid; it is not rejected here.
        """
        with tracer.start_as_current_span("fleet.receive_shot") as span:
            span.set_attribute("shot.row", row)
            span.set_attribute("shot.col", col)
            span.set_attribute("board.owner", self.owner)
            if self.phase is BoardPhase.SETUP:
                logger.error(
                    "shot_before_placement_complete",
                    extra={"row": row, "col": col, "owner": self.owner},
                )
                raise PlacementIncompleteError(
                    f"{self.owner}'s fleet is not fully placed; shots are not accepted yet."
                )

            resolution = self.grid.resolve_shot(row, col)
            span.set_attribute("shot.outcome", resolution.outcome.value)
            SHOT_COUNTER.add(
                1, attributes={"outcome": resolution.outcome.value, "owner": self.owner}
            )

            if resolution.outcome is not ShotOutcome.HIT:
                logger.info(
                    f"shot_{resolution.outcome.value}",
                    extra={"row": row, "col": col, "owner": self.owner},
                )
                return ShotReport(resolution.outcome, resolution.coordinate)

            vessel = self._vessels[resolution.vessel_id]
            sunk_name = vessel.apply_damage()
            logger.info(
                "shot_hit",
                extra={"row": row, "col": col, "vessel": vessel.name, "owner": self.owner},
            )
            if sunk_name is not None:
                span.set_attribute("vessel.sunk", sunk_name)
                logger.info("vessel_sunk", extra={"vessel": sunk_name, "owner": self.owner})
                if self.is_fleet_destroyed():
                    logger.info("fleet_destroyed", extra={"owner": self.owner})
            return ShotReport(
                ShotOutcome.HIT,
                resolution.coordinate,
                vessel_name=vessel.name,
                sunk=sunk_name is not None,
            )

    def is_fleet_destroyed(self) -> bool:
        return all(vessel.is_destroyed() for vessel in self._vessels.values())

    def is_targeted(self, row: int, col: int) -> bool:
        if not self.grid.in_bounds(row, col):
            return False
        return self.grid.cell_state(row, col) in (CellState.HIT, CellState.MISS)

    def untargeted(self) -> list[Coordinate]:
        return self.grid.untargeted()

    def render(self, hide_vessels: bool = False) -> GridView:
        return self.grid.render(hide_vessels)

    def status(self) -> list[VesselStatus]:
        return [
            VesselStatus(v.name, v.length, v.remaining, v.is_destroyed())
            for v in self._vessels.values()
        ]
