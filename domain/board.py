"""
Board entity - the authoritative occupancy map of the grid.
"""

import random
from typing import Dict, List, Optional

from .constants import Occupant
from .errors import NoFreeSpaceError, ValidationError, guarded
from .geometry import Position, Size


class Board:
    """
    A width x height grid where every cell holds exactly one Occupant.

    Attributes:
        size: board dimensions
        rng: random source used to pick free cells
    """

    def __init__(self, size: Optional[Size] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.size = Size(0, 0)
        self._cells: Dict[Position, Occupant] = {}
        if size is not None:
            self.init_game_board(size)

    @guarded
    def init_game_board(self, size: Size) -> None:
        """Reset the grid to `size` with every cell EMPTY."""
        width, height = size
        if width <= 0 or height <= 0:
            raise ValidationError(f"invalid board size {width}x{height}")

        self.size = Size(width, height)
        self._cells = {
            Position(x, y): Occupant.EMPTY
            for y in range(height)
            for x in range(width)
        }

    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.size.width and 0 <= y < self.size.height

    @guarded
    def occupant(self, position: Position) -> Occupant:
        if not self.in_bounds(position):
            raise ValidationError(f"position {position} is out of bounds")
        return self._cells[Position(*position)]

    @guarded
    def set_occupant(self, position: Position, kind: Occupant) -> None:
        if not self.in_bounds(position):
            raise ValidationError(f"position {position} is out of bounds")
        self._cells[Position(*position)] = kind

    def free_cells(self) -> List[Position]:
        """All EMPTY cells, row by row."""
        return [pos for pos, kind in self._cells.items() if kind is Occupant.EMPTY]

    @guarded
    def random_free_position(self) -> Position:
        """
        Return a uniformly chosen EMPTY cell.

        Raises:
            NoFreeSpaceError: if every cell is occupied.
        """
        free = self.free_cells()
        if not free:
            raise NoFreeSpaceError(f"no free cell left on a {self.size} board")
        return self.rng.choice(free)

    @staticmethod
    def is_candy(ch: str) -> bool:
        return ch == Occupant.CANDY.glyph

    @staticmethod
    def is_snake_part(ch: str) -> bool:
        return ch == Occupant.SNAKE_BODY.glyph

    def __repr__(self):
        return f"<Board size={self.size}, free={len(self.free_cells())}>"
