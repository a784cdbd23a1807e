#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four
"""

import argparse
import os
import sys

# Add the project root to Python path so the script runs from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectfour.interfaces.cli import SimpleCLI


def handle_game_command(args):
    """Forward the 'game' component options to the CLI."""
    argv = [args.command]

    if args.debug:
        argv.append('--debug')
    argv.extend(['--debug-level', args.debug_level])
    if args.seed is not None:
        argv.extend(['--seed', str(args.seed)])
    if args.command == 'play':
        if args.mode is not None:
            argv.extend(['--mode', str(args.mode)])
        argv.extend(['--delay', str(args.delay)])
    if args.command == 'simulate':
        argv.extend(['--games', str(args.games)])

    SimpleCLI().run(argv)


def main(argv=None):
    """Main entry point for Connect Four."""
    parser = argparse.ArgumentParser(
        description='Connect Four',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Choose a mode interactively and play
    python run.py game play

    # Play against the computer
    python run.py game play --mode 2

    # Watch two computers play with a fixed seed and no pauses
    python run.py game play --mode 3 --seed 42 --delay 0

    # Play 1000 computer vs computer games and report the results
    python run.py game simulate --games 1000 --seed 7
    """
    )

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    game_parser = subparsers.add_parser('game',
        help='Run the Connect Four game',
        description='Play Connect Four or simulate automated matches')
    game_parser.add_argument('command',
        choices=['play', 'simulate'],
        help='Game command: play (interactive game), simulate (automated matches)')
    game_parser.add_argument('--mode',
        type=int,
        help='1: human vs human, 2: human vs computer, 3: computer vs computer')
    game_parser.add_argument('--seed',
        type=int,
        help='Seed for automated moves')
    game_parser.add_argument('--delay',
        type=float,
        default=0.5,
        help='Seconds an automated contestant thinks per move')
    game_parser.add_argument('--games',
        type=int,
        default=100,
        help='Number of matches for simulate')
    game_parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode with detailed logging')
    game_parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='warning',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')

    args = parser.parse_args(argv)
    if args.component == 'game':
        handle_game_command(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
