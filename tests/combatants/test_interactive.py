"""Tests for the human-driven combatant."""

import random

import pytest
from naval.combatants import (
    AutomatedCombatant,
    Combatant,
    InteractiveCombatant,
    parse_placement,
    parse_target,
)
from naval.combatants.interactive import DECLINE_MESSAGES
from naval.engine.errors import Decline
from naval.engine.fleet import BoardPhase, FleetBoard
from naval.engine.vessel import Coordinate, Orientation


class ScriptedInput:
    """Input source replaying canned lines."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.prompts: list[str] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)


def make_player(lines: list[str], catalog=None) -> tuple[InteractiveCombatant, list[str]]:
    messages: list[str] = []
    board = FleetBoard(owner="human", catalog=catalog) if catalog else FleetBoard(owner="human")
    player = InteractiveCombatant("human", board, ScriptedInput(lines), notify=messages.append)
    return player, messages


def active_opponent() -> FleetBoard:
    board = FleetBoard(owner="cpu")
    AutomatedCombatant("cpu", board, random.Random(1)).configure_fleet(board)
    return board


def test_parse_target_accepts_spaces_and_commas() -> None:
    assert parse_target("3 7") == Coordinate(3, 7)
    assert parse_target(" 3,7 ") == Coordinate(3, 7)
    assert parse_target("3, 7") == Coordinate(3, 7)


@pytest.mark.parametrize("raw", ["", "3", "3 7 1", "a b", "3.5 2"])
def test_parse_target_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_target(raw)


def test_parse_placement() -> None:
    assert parse_placement("2 4 h") == (Coordinate(2, 4), Orientation.HORIZONTAL)
    with pytest.raises(ValueError):
        parse_placement("2 4 D")
    with pytest.raises(ValueError):
        parse_placement("2 4")


def test_configure_fleet_reprompts_until_every_vessel_fits() -> None:
    player, messages = make_player(
        [
            "0 6 H",  # carrier off the edge
            "nonsense",
            "0 0 Q",  # bad orientation
            "11 0 H",  # origin off the board
            "0 0 H",
            "0 0 V",  # battleship collides with carrier
            "2 0 H",
            "4 0 H",
            "6 0 H",
            "8 0 H",
        ]
    )

    player.configure_fleet(player.board)

    assert player.board.phase is BoardPhase.ACTIVE
    assert player.board.vessel("Battleship").coordinates[0] == Coordinate(2, 0)
    assert DECLINE_MESSAGES[Decline.OUT_OF_BOUNDS] in messages
    assert DECLINE_MESSAGES[Decline.COLLISION] in messages
    assert any(message.startswith("Invalid input:") for message in messages)


def test_choose_target_skips_bad_and_repeated_coordinates() -> None:
    opponent = active_opponent()
    opponent.receive_shot(4, 4)
    player, messages = make_player(["", "10 0", "4 4", "x y", "4 5"])

    target = player.choose_target(opponent)

    assert target == Coordinate(4, 5)
    assert messages.count(DECLINE_MESSAGES[Decline.OUT_OF_BOUNDS]) == 1
    assert messages.count(DECLINE_MESSAGES[Decline.ALREADY_TARGETED]) == 1
    assert not opponent.is_targeted(4, 5)


def test_exhausted_input_propagates() -> None:
    player, _ = make_player([])
    with pytest.raises(EOFError):
        player.choose_target(active_opponent())


def test_board_is_shown_before_each_placement_prompt() -> None:
    player, messages = make_player(["1 1 V"], catalog=[("Patrol Boat", 2)])
    player.configure_fleet(player.board)
    assert any(message.startswith("  0 1 2") for message in messages)


def test_satisfies_combatant_protocol() -> None:
    player, _ = make_player([])
    assert isinstance(player, Combatant)
