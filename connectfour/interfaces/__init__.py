"""
connectfour.interfaces - Front ends that drive the engine

Contains the console interface, the status-coded API facade and the
Gymnasium environment.
"""

# Modules are imported directly so the CLI does not pull in gymnasium
__all__ = []
