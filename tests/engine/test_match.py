"""High-level match tests."""

import random

import pytest
from naval.combatants import AutomatedCombatant
from naval.engine.fleet import BoardPhase, FleetBoard
from naval.engine.match import Match, MatchPhase
from naval.engine.vessel import Coordinate


def automated_pair(seed: int = 42) -> tuple[AutomatedCombatant, AutomatedCombatant]:
    rng = random.Random(seed)
    first = AutomatedCombatant("alpha", FleetBoard(owner="alpha"), rng)
    second = AutomatedCombatant("bravo", FleetBoard(owner="bravo"), rng)
    return first, second


class FixedTargets:
    """Combatant that fires at a scripted list of coordinates."""

    def __init__(self, name: str, board: FleetBoard, targets: list[Coordinate]) -> None:
        self.name = name
        self.board = board
        self._targets = list(targets)

    def configure_fleet(self, board: FleetBoard) -> None:
        board.place_all_vessels(AutomatedCombatant(self.name, board, random.Random(0)))

    def choose_target(self, opponent_board: FleetBoard) -> Coordinate:
        return self._targets.pop(0)


def test_full_automated_match_finishes_with_a_winner() -> None:
    first, second = automated_pair()
    match = Match(first, second)
    reports = []

    winner = match.play(on_turn=reports.append)

    assert match.phase is MatchPhase.FINISHED
    assert winner is match.winner
    assert winner in (first, second)
    loser = match.opponent_of(winner)
    assert loser.board.phase is BoardPhase.DEFEATED
    assert not winner.board.is_fleet_destroyed()
    assert reports[-1].fleet_destroyed
    assert reports[-1].shooter == winner.name
    assert len(reports) == match.turns
    # Nobody needs more shots than there are cells.
    assert match.turns <= 2 * 100


def test_turns_alternate_and_first_combatant_starts() -> None:
    first, second = automated_pair(seed=3)
    match = Match(first, second)
    match.setup()

    shooters = [match.play_turn().shooter for _ in range(4)]
    assert shooters == ["alpha", "bravo", "alpha", "bravo"]


def test_play_turn_requires_setup() -> None:
    first, second = automated_pair()
    match = Match(first, second)
    with pytest.raises(RuntimeError):
        match.play_turn()


def test_setup_twice_is_rejected() -> None:
    match = Match(*automated_pair())
    match.setup()
    with pytest.raises(RuntimeError):
        match.setup()


def test_setup_keeps_a_fleet_that_is_already_placed() -> None:
    first, second = automated_pair(seed=9)
    first.configure_fleet(first.board)
    layout = [vessel.coordinates for vessel in first.board.vessels]

    Match(first, second).setup()

    assert [vessel.coordinates for vessel in first.board.vessels] == layout
    assert second.board.phase is BoardPhase.ACTIVE


def test_no_turns_after_a_fleet_is_destroyed() -> None:
    defender_board = FleetBoard(owner="defender", catalog=[("Patrol Boat", 2)])
    attacker_board = FleetBoard(owner="attacker", catalog=[("Patrol Boat", 2)])
    defender = FixedTargets("defender", defender_board, [Coordinate(9, 9)])
    defender.configure_fleet(defender_board)
    targets = list(defender_board.vessel("Patrol Boat").coordinates)
    attacker = FixedTargets("attacker", attacker_board, targets)

    match = Match(attacker, defender)
    match.setup()
    first = match.play_turn()
    assert first.shot.hit and not first.shot.sunk
    match.play_turn()  # defender's shot
    last = match.play_turn()

    assert last.shot.sunk
    assert last.fleet_destroyed
    assert match.winner is attacker
    assert match.phase is MatchPhase.FINISHED
    with pytest.raises(RuntimeError):
        match.play_turn()


def test_unusable_target_is_a_combatant_bug() -> None:
    board_a = FleetBoard(owner="a", catalog=[("Patrol Boat", 2)])
    board_b = FleetBoard(owner="b", catalog=[("Patrol Boat", 2)])
    shooter = FixedTargets("a", board_a, [Coordinate(0, 0), Coordinate(0, 0)])
    other = FixedTargets("b", board_b, [Coordinate(5, 5)])
    match = Match(shooter, other)
    match.setup()
    match.play_turn()
    match.play_turn()

    with pytest.raises(RuntimeError):
        match.play_turn()


def test_combatants_need_separate_boards() -> None:
    board = FleetBoard()
    with pytest.raises(ValueError):
        Match(
            AutomatedCombatant("a", board, random.Random(1)),
            AutomatedCombatant("b", board, random.Random(2)),
        )
