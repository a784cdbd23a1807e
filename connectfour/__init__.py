"""
connectfour - Connect Four rules engine

This package provides the Connect Four game engine (board state, move
legality, win/draw detection and turn sequencing) together with thin
collaborators that drive it: a console interface, a status-coded API
facade and a Gymnasium environment.
"""

# Version number
__version__ = '0.1.0'
