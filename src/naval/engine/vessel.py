"""Vessel domain model for the naval engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import VesselStateError


@dataclass(frozen=True)
class Coordinate:
    """Immutable grid coordinate, row before column."""

    row: int
    col: int


class Orientation(Enum):
    """Allowed vessel orientations."""

    HORIZONTAL = "H"
    VERTICAL = "V"

    @classmethod
    def parse(cls, value: object) -> Orientation | None:
        """Return the orientation named by ``value`` or ``None`` if it names none."""
        if isinstance(value, Orientation):
            return value
        if not isinstance(value, str):
            return None
        cleaned = value.strip().upper()
        if cleaned in {"H", "HOR", "HORIZONTAL"}:
            return cls.HORIZONTAL
        if cleaned in {"V", "VER", "VERTICAL"}:
            return cls.VERTICAL
        return None

    def step(self) -> tuple[int, int]:
        """Return the (row, col) delta between consecutive cells."""
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)


# One side's fleet, in placement order.
FLEET_CATALOG: tuple[tuple[str, int], ...] = (
    ("Aircraft Carrier", 5),
    ("Battleship", 4),
    ("Submarine", 3),
    ("Destroyer", 3),
    ("Patrol Boat", 2),
)


@dataclass
class Vessel:
    """A single ship with a fixed length and accumulating damage."""

    name: str
    length: int
    hits: int = field(default=0, init=False)
    _coordinates: tuple[Coordinate, ...] = field(default=(), init=False, repr=False)
    _destroyed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Vessel length must be positive, got {self.length}.")

    @property
    def coordinates(self) -> tuple[Coordinate, ...]:
        """Ordered cells the vessel occupies; empty until placed."""
        return self._coordinates

    @property
    def remaining(self) -> int:
        return self.length - self.hits

    def assign_coordinates(self, coords: tuple[Coordinate, ...]) -> None:
        """Record where the vessel was placed. Allowed exactly once."""
        if self._coordinates:
            raise VesselStateError(f"{self.name} has already been placed.")
        if len(coords) != self.length:
            raise VesselStateError(
                f"{self.name} needs {self.length} cells, got {len(coords)}."
            )
        self._coordinates = tuple(coords)

    def is_placed(self) -> bool:
        return bool(self._coordinates)

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self._coordinates

    def apply_damage(self) -> str | None:
        """Record one hit and return the vessel name if that hit sank it."""
        if self._destroyed:
            raise VesselStateError(f"{self.name} is already destroyed.")
        self.hits += 1
        if self.hits >= self.length:
            self._destroyed = True
            return self.name
        return None

    def is_destroyed(self) -> bool:
        return self._destroyed
