"""Cell-state matrix with vessel back-references."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .errors import Decline
from .vessel import Coordinate, Orientation

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 10


class CellState(Enum):
    """State of a single grid cell."""

    EMPTY = "~"
    OCCUPIED = "S"
    HIT = "X"
    MISS = "O"

    @property
    def symbol(self) -> str:
        return self.value


class ShotOutcome(Enum):
    """Result of a shot against a grid cell."""

    HIT = "hit"
    MISS = "miss"
    ALREADY_TARGETED = "already_targeted"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of :meth:`OccupancyGrid.place`."""

    coordinates: tuple[Coordinate, ...] = ()
    decline: Decline | None = None

    @property
    def accepted(self) -> bool:
        return self.decline is None


@dataclass(frozen=True)
class ShotResolution:
    """Outcome of :meth:`OccupancyGrid.resolve_shot`.

    ``vessel_id`` names the occupant of the cell and is only set on a hit.
    """

    outcome: ShotOutcome
    coordinate: Coordinate
    vessel_id: str | None = None

    @property
    def decline(self) -> Decline | None:
        if self.outcome is ShotOutcome.ALREADY_TARGETED:
            return Decline.ALREADY_TARGETED
        if self.outcome is ShotOutcome.OUT_OF_BOUNDS:
            return Decline.OUT_OF_BOUNDS
        return None


@dataclass(frozen=True)
class GridSnapshot:
    """Immutable copy of every cell state and owner."""

    states: tuple[tuple[CellState, ...], ...]
    owners: tuple[tuple[str | None, ...], ...]


class GridView:
    """Text view of a grid, regenerated from the live cells on every iteration."""

    def __init__(self, grid: OccupancyGrid, hide_vessels: bool) -> None:
        self._grid = grid
        self.hide_vessels = hide_vessels

    def __iter__(self) -> Iterator[str]:
        size = self._grid.size
        width = len(str(size - 1))
        yield " " * width + " " + " ".join(f"{col:>{width}}" for col in range(size))
        for row in range(size):
            symbols = []
            for col in range(size):
                state = self._grid.cell_state(row, col)
                if state is CellState.OCCUPIED and self.hide_vessels:
                    state = CellState.EMPTY
                symbols.append(f"{state.symbol:>{width}}")
            yield f"{row:>{width}} " + " ".join(symbols)

    def __str__(self) -> str:
        return "\n".join(self)


class OccupancyGrid:
    """Square grid of cell states plus the authoritative cell-to-vessel mapping."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}.")
        self.size = size
        self._states: list[list[CellState]] = [
            [CellState.EMPTY] * size for _ in range(size)
        ]
        self._owners: list[list[str | None]] = [[None] * size for _ in range(size)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell_state(self, row: int, col: int) -> CellState:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside the {self.size}x{self.size} grid.")
        return self._states[row][col]

    def occupant(self, row: int, col: int) -> str | None:
        """Return the id of the vessel on (or formerly on) a cell."""
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside the {self.size}x{self.size} grid.")
        return self._owners[row][col]

    def _run(
        self, row: int, col: int, orientation: Orientation, length: int
    ) -> list[Coordinate]:
        d_row, d_col = orientation.step()
        return [Coordinate(row + d_row * i, col + d_col * i) for i in range(length)]

    def _check_run(self, cells: list[Coordinate]) -> Decline | None:
        if not all(self.in_bounds(c.row, c.col) for c in cells):
            return Decline.OUT_OF_BOUNDS
        if any(self._states[c.row][c.col] is not CellState.EMPTY for c in cells):
            return Decline.COLLISION
        return None

    def place(
        self,
        vessel_id: str,
        origin_row: int,
        origin_col: int,
        orientation: Orientation | str,
        length: int,
    ) -> PlacementResult:
        """Claim ``length`` consecutive cells for ``vessel_id``, or none at all."""
        parsed = Orientation.parse(orientation)
        if parsed is None:
            return PlacementResult(decline=Decline.INVALID_ORIENTATION)
        if length < 1:
            raise ValueError(f"Vessel length must be positive, got {length}.")

        cells = self._run(origin_row, origin_col, parsed, length)
        decline = self._check_run(cells)
        if decline is not None:
            logger.debug(
                "grid_place_declined",
                extra={"vessel": vessel_id, "reason": decline.value},
            )
            return PlacementResult(decline=decline)

        for cell in cells:
            self._states[cell.row][cell.col] = CellState.OCCUPIED
            self._owners[cell.row][cell.col] = vessel_id
        return PlacementResult(coordinates=tuple(cells))

    def resolve_shot(self, row: int, col: int) -> ShotResolution:
        """Mark a cell as hit or miss and report whose vessel, if any, was struck."""
        coord = Coordinate(row, col)
        if not self.in_bounds(row, col):
            return ShotResolution(ShotOutcome.OUT_OF_BOUNDS, coord)

        state = self._states[row][col]
        if state in (CellState.HIT, CellState.MISS):
            return ShotResolution(ShotOutcome.ALREADY_TARGETED, coord)
        if state is CellState.EMPTY:
            self._states[row][col] = CellState.MISS
            return ShotResolution(ShotOutcome.MISS, coord)

        self._states[row][col] = CellState.HIT
        return ShotResolution(ShotOutcome.HIT, coord, self._owners[row][col])

    def untargeted(self) -> list[Coordinate]:
        """Every coordinate not yet shot at, row-major."""
        return [
            Coordinate(row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self._states[row][col] in (CellState.EMPTY, CellState.OCCUPIED)
        ]

    def legal_placements(self, length: int) -> list[tuple[int, int, Orientation]]:
        """Every origin and orientation that ``place`` would currently accept."""
        candidates: list[tuple[int, int, Orientation]] = []
        for orientation in Orientation:
            for row in range(self.size):
                for col in range(self.size):
                    if self._check_run(self._run(row, col, orientation, length)) is None:
                        candidates.append((row, col, orientation))
        return candidates

    def render(self, hide_vessels: bool = False) -> GridView:
        return GridView(self, hide_vessels)

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            states=tuple(tuple(row) for row in self._states),
            owners=tuple(tuple(row) for row in self._owners),
        )
