"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, the contestants and the
engine that sequences a match.
"""

from connectfour.game.board import Board
from connectfour.game.contestant import Contestant
from connectfour.game.engine import Engine, Match

__all__ = ['Board', 'Contestant', 'Engine', 'Match']
