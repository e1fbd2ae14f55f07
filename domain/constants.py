"""
Game constants for termsnake.
"""

from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Snake headings, each mapped to a unit (dx, dy) delta in screen coordinates."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


# Movement directions
UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}


class Occupant(Enum):
    """What sits in a board cell. The value is the glyph used to draw it."""

    EMPTY = " "
    SNAKE_BODY = "#"
    CANDY = "*"
    WALL = "+"

    @property
    def glyph(self) -> str:
        return self.value


# Game settings
DEFAULT_BOARD_SIZE = 40
MIN_BOARD_SIZE = 2  # room for the snake and one candy
SIZE_INCREMENT = 10
REFRESH_INTERVAL = 0.1  # seconds between ticks, shared by the engine and the animation
