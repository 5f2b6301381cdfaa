"""Command-line driver for playing a naval match against the computer."""

from __future__ import annotations

import argparse
import random
from typing import Callable, Sequence

from naval.combatants import AutomatedCombatant, InteractiveCombatant
from naval.config import MatchSettings
from naval.engine.fleet import FleetBoard, ShotReport
from naval.engine.match import Match, MatchPhase, TurnReport
from naval.telemetry import TelemetryConfig, init_telemetry


class ConsoleInput:
    """Reads lines from standard input; ``q`` quits."""

    def read_line(self, prompt: str) -> str:
        raw = input(prompt)
        if raw.strip().lower() in {"q", "quit"}:
            raise SystemExit("Goodbye!")
        return raw


def describe_shot(shooter: str, shot: ShotReport) -> str:
    coord = shot.coordinate
    text = f"{shooter} fired at ({coord.row}, {coord.col}): {'HIT' if shot.hit else 'MISS'}"
    if shot.sunk:
        text += f"\n{shot.vessel_name} sunk!"
    return text


def describe_fleet(board: FleetBoard) -> str:
    parts = []
    for status in board.status():
        state = "sunk" if status.destroyed else f"{status.remaining}/{status.length}"
        parts.append(f"{status.name} {state}")
    return ", ".join(parts)


def show_boards(own: FleetBoard, enemy: FleetBoard, out: Callable[[str], None] = print) -> None:
    out("\nYour board:")
    out(str(own.render(hide_vessels=False)))
    out("\nEnemy waters (your shots):")
    out(str(enemy.render(hide_vessels=True)))


def play_game(settings: MatchSettings, auto_place: bool = False) -> bool:
    """Play one match on the console; returns True when the human wins."""
    print("Welcome to Naval Combat!")
    rng = random.Random(settings.seed)
    human_board = FleetBoard(owner=settings.player_name, size=settings.board_size)
    computer_board = FleetBoard(owner=settings.computer_name, size=settings.board_size)

    human = InteractiveCombatant(settings.player_name, human_board, ConsoleInput())
    computer = AutomatedCombatant(settings.computer_name, computer_board, rng)

    if auto_place:
        human_board.place_all_vessels(computer)
        print("\nYour vessels have been positioned automatically.")

    match = Match(human, computer)
    match.setup()
    print(f"{computer.name} has positioned its vessels.")

    def on_turn(report: TurnReport) -> None:
        print(describe_shot(report.shooter, report.shot))
        if report.shooter == computer.name and not report.fleet_destroyed:
            print(f"Your fleet: {describe_fleet(human_board)}")

    while match.phase is MatchPhase.IN_PROGRESS:
        if match.current is human:
            print(f"\n--- {human.name}'s turn ---")
            show_boards(human_board, computer_board)
        else:
            print(f"\n--- {computer.name}'s turn ---")
        on_turn(match.play_turn())

    if match.winner is human:
        print(f"\nCongratulations! {human.name} sank every vessel of {computer.name}.")
        return True
    print(f"\n{computer.name} sank all of your vessels. Better luck next battle!")
    return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a naval combat match via the CLI.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--auto", action="store_true", help="Place your fleet randomly instead of by hand."
    )
    parser.add_argument("--name", default=None, help="Your name in the match.")
    parser.add_argument(
        "--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)."
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = MatchSettings.from_env(
        seed=args.seed, player_name=args.name, log_level=args.log_level
    )
    init_telemetry(TelemetryConfig.from_env(log_level=settings.log_level))
    try:
        play_game(settings, auto_place=args.auto)
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")


if __name__ == "__main__":
    main()
