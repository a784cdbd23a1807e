"""
cli.py - Console front end for Connect Four

Collects the game mode and contestant names, renders the board, prompts
human contestants for columns and lets automated contestants "think" before
the engine picks their move. Also runs batches of automated matches.
"""

import argparse
import sys
import time
from typing import List, Optional, Tuple

import numpy as np

from connectfour.debug import debug, DebugLevel
from connectfour.errors import ErrorKind, InvalidConfigurationError, MoveResult
from connectfour.game.contestant import Contestant
from connectfour.game.engine import Engine
from connectfour.utils import COLS, GameMode, GameResult

QUIT = "q"

MODE_MENU = """Please select a mode:
1. Human vs Human
2. Human vs Computer
3. Computer vs Computer"""


class SimpleCLI:
    """Simple command-line interface for playing Connect Four."""

    def __init__(self):
        self.engine: Optional[Engine] = None
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--seed', type=int, default=None,
                            help='Seed for automated moves (default: system entropy)')
        common.add_argument('--debug', action='store_true',
                            help='Enable debug logging (same as --debug-level debug)')
        common.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')

        play_parser = subparsers.add_parser('play', parents=[common],
                                            help='Play a game interactively')
        play_parser.add_argument('--mode', type=int, default=None,
                                 help='1: human vs human, 2: human vs computer, '
                                      '3: computer vs computer (asked if omitted)')
        play_parser.add_argument('--delay', type=float, default=0.5,
                                 help='Seconds an automated contestant thinks per move')

        simulate_parser = subparsers.add_parser('simulate', parents=[common],
                                                help='Play automated matches and report results')
        simulate_parser.add_argument('--games', type=int, default=100,
                                     help='Number of matches to play')

        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Run the command selected on the command line."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'simulate':
            self.simulate()
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    # Setup

    def choose_mode(self) -> int:
        """Ask for a mode until the answer is a number."""
        while True:
            print(MODE_MENU)
            answer = input("Mode: ").strip()
            try:
                return int(answer)
            except ValueError:
                print(f"'{answer}' is not a mode number.")

    def collect_contestants(self, mode: GameMode) -> Tuple[Contestant, Contestant]:
        """Build the two contestants, asking humans for their names."""
        if mode == GameMode.HUMAN_VS_HUMAN:
            return (Contestant(self.ask_name("Enter Player 1 name: ")),
                    Contestant(self.ask_name("Enter Player 2 name: ")))
        if mode == GameMode.HUMAN_VS_AUTOMATED:
            return Contestant(self.ask_name("Enter Player name: ")), Contestant("Computer")
        return Contestant("Computer 1"), Contestant("Computer 2")

    def ask_name(self, prompt: str) -> str:
        return input(prompt).strip()

    def setup_match(self) -> Engine:
        """Ask for a mode and names until the engine accepts the configuration."""
        mode = self.args.mode
        while True:
            if mode is None:
                mode = self.choose_mode()
            try:
                game_mode = GameMode(mode)
            except ValueError:
                game_mode = None

            contestants = self.collect_contestants(game_mode) if game_mode else (None, None)
            try:
                return Engine(mode, *contestants, seed=self.args.seed)
            except InvalidConfigurationError as e:
                print(f"Cannot start game: {e}")
                mode = None

    # Play loop

    def play_game(self) -> None:
        """Play one Connect Four match on the console."""
        print("Welcome to Connect Four!")
        self.engine = self.setup_match()
        print(self.render())

        while not self.engine.is_game_over():
            contestant = self.engine.active

            if contestant.is_automated:
                print(f"{contestant.display_name} is thinking...")
                time.sleep(self.args.delay)
                # Any legal column will do; the engine picks the real one
                move = self.engine.valid_columns()[0]
                result = self.engine.drop_piece(move)
                print(f"{contestant.display_name} chooses column {result.column}")
            else:
                move = self.get_human_move(contestant)
                if move is None:
                    print("Quitting game.")
                    return
                result = self.engine.drop_piece(move)

            if not result.ok:
                self.report_rejection(result, move)
                continue

            print(self.render())

        self.announce_result()

    def get_human_move(self, contestant: Contestant) -> Optional[int]:
        """
        Prompt a human contestant for a column.

        Returns:
            The column typed in (range is checked by the engine), or None to quit
        """
        while True:
            user_input = input(f"{contestant.display_name}, please choose a column "
                               f"(0-{COLS - 1}, {QUIT} to quit): ").strip().lower()
            if user_input == QUIT:
                return None
            try:
                return int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number.")

    def report_rejection(self, result: MoveResult, column: int) -> None:
        if result.error == ErrorKind.INVALID_COLUMN:
            print(f"Invalid move. Please choose a column between 0 and {COLS - 1}.")
        elif result.error == ErrorKind.COLUMN_FULL:
            print(f"Column {column} is full. Please choose another column.")
        else:
            print("The game is over.")

    def announce_result(self) -> None:
        print("Game over!")
        winner = self.engine.get_winner()
        if winner is None:
            print("It's a draw!")
        else:
            print(f"{winner.display_name} wins!")

    def render(self) -> str:
        return "Current board:\n" + self.engine.render() + "\n"

    # Batch play

    def simulate(self) -> None:
        """Play automated matches and print how they ended."""
        games = self.args.games
        rng = np.random.default_rng(self.args.seed)
        tally = {"Red": 0, "Blue": 0, "Draw": 0}
        total_moves = 0

        print(f"Simulating {games} computer vs computer games...")
        debug.start_timer("simulate")
        for _ in range(games):
            engine = Engine(GameMode.AUTOMATED_VS_AUTOMATED,
                            Contestant("Computer 1"), Contestant("Computer 2"), rng=rng)
            while not engine.is_game_over():
                engine.drop_piece(engine.valid_columns()[0])

            match = engine.get_state()
            total_moves += match.moves_made
            if match.result == GameResult.DRAWN:
                tally["Draw"] += 1
            else:
                tally[match.winner.color.name.capitalize()] += 1
        elapsed = debug.end_timer("simulate", "cli")

        print(f"Red (first player) wins: {tally['Red']}")
        print(f"Blue (second player) wins: {tally['Blue']}")
        print(f"Draws: {tally['Draw']}")
        if games:
            print(f"Average game length: {total_moves / games:.1f} moves")
            print(f"Elapsed: {elapsed:.3f} seconds ({elapsed / games * 1000:.3f} ms per game)")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run(argv)


if __name__ == "__main__":
    main()
