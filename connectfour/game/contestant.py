"""
contestant.py - The two participants of a match
"""

from typing import Optional

from connectfour.utils import Cell


class Contestant:
    """
    One side of a match.

    Name, color and control mode are read-only from outside the package. The
    engine assigns the color (Red for the first contestant, Blue for the
    second) and the automated flag when a match is initialized, and changes
    the name through ``Engine.rename_contestant``. Contestants compare by
    identity.
    """

    def __init__(self, name: str = ""):
        self._name = name
        self._color: Optional[Cell] = None
        self._is_automated = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def color(self) -> Optional[Cell]:
        return self._color

    @property
    def is_automated(self) -> bool:
        return self._is_automated

    @property
    def display_name(self) -> str:
        """Name to show to users, falling back to the color."""
        if self._name:
            return self._name
        if self._color is not None:
            return self._color.name.capitalize()
        return "Anonymous"

    def _seat(self, color: Cell, is_automated: bool) -> None:
        # Called by the engine only
        self._color = color
        self._is_automated = is_automated

    def _rename(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        color = self._color.name if self._color else None
        return (f"Contestant(name={self._name!r}, color={color}, "
                f"is_automated={self._is_automated})")
