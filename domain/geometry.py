"""
Small value types shared by the game model and the display layer.
"""

from typing import NamedTuple

from .constants import Direction


class Position(NamedTuple):
    """A cell on the board. (0, 0) is the top left corner."""

    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Size(NamedTuple):
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Sprite(NamedTuple):
    """One glyph to draw at one board position."""

    position: Position
    value: str


class ViewPosition(NamedTuple):
    """
    Frame corners of a view, border included.

    The drawable area is (x2 - x1 - 1) columns by (y2 - y1 - 1) rows.
    """

    x1: int
    y1: int
    x2: int
    y2: int
