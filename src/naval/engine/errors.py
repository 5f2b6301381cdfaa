"""Failure taxonomy for the naval engine.

Placement and shot failures a player can cause are reported as :class:`Decline`
values so callers can retry without unwinding. Exceptions are reserved for
driver bugs.
"""

from __future__ import annotations

from enum import Enum


class Decline(Enum):
    """Reasons a placement or shot request was refused."""

    INVALID_ORIENTATION = "invalid_orientation"
    OUT_OF_BOUNDS = "out_of_bounds"
    COLLISION = "collision"
    ALREADY_TARGETED = "already_targeted"


class NavalError(Exception):
    """Base class for engine precondition violations."""


class PlacementIncompleteError(NavalError, RuntimeError):
    """A shot was fired at a board whose fleet is not fully placed."""


class VesselStateError(NavalError, RuntimeError):
    """A vessel was mutated in a way its lifecycle forbids."""
