"""Tests for Vessel domain logic."""

import pytest
from naval.engine.errors import VesselStateError
from naval.engine.vessel import FLEET_CATALOG, Coordinate, Orientation, Vessel


def test_vessel_sinks_exactly_at_length() -> None:
    vessel = Vessel("Submarine", 3)
    assert vessel.apply_damage() is None
    assert not vessel.is_destroyed()
    assert vessel.apply_damage() is None
    assert not vessel.is_destroyed()
    assert vessel.apply_damage() == "Submarine"
    assert vessel.is_destroyed()
    assert vessel.hits == vessel.length
    assert vessel.remaining == 0


def test_damage_after_destruction_is_an_invariant_violation() -> None:
    vessel = Vessel("Patrol Boat", 2)
    vessel.apply_damage()
    vessel.apply_damage()
    with pytest.raises(VesselStateError):
        vessel.apply_damage()
    assert vessel.hits == 2


def test_vessel_rejects_non_positive_length() -> None:
    with pytest.raises(ValueError):
        Vessel("Raft", 0)


def test_coordinates_assigned_once_with_matching_length() -> None:
    vessel = Vessel("Patrol Boat", 2)
    assert not vessel.is_placed()

    with pytest.raises(VesselStateError):
        vessel.assign_coordinates((Coordinate(0, 0),))

    coords = (Coordinate(0, 0), Coordinate(0, 1))
    vessel.assign_coordinates(coords)
    assert vessel.is_placed()
    assert vessel.coordinates == coords
    assert vessel.occupies(Coordinate(0, 1))
    assert not vessel.occupies(Coordinate(1, 1))

    with pytest.raises(VesselStateError):
        vessel.assign_coordinates((Coordinate(5, 5), Coordinate(5, 6)))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("H", Orientation.HORIZONTAL),
        ("v", Orientation.VERTICAL),
        (" horizontal ", Orientation.HORIZONTAL),
        (Orientation.VERTICAL, Orientation.VERTICAL),
        ("D", None),
        ("", None),
        (1, None),
    ],
)
def test_orientation_parse(raw: object, expected: Orientation | None) -> None:
    assert Orientation.parse(raw) is expected


def test_catalog_matches_standard_fleet() -> None:
    assert [length for _, length in FLEET_CATALOG] == [5, 4, 3, 3, 2]
    assert sum(length for _, length in FLEET_CATALOG) == 17
    assert len({name for name, _ in FLEET_CATALOG}) == len(FLEET_CATALOG)
