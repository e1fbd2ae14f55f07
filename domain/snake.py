"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, List, Optional

from .constants import Direction
from .geometry import Position


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        direction: heading used by the last move
        pending_direction: heading requested by the player, committed on the next move
    """

    def __init__(self, positions: Iterable[Position], direction: Direction):
        self.positions = deque(Position(*p) for p in positions)
        if not self.positions:
            raise ValueError("Snake must have at least one segment")
        self.direction = direction
        self.pending_direction = direction

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        """Return the tail position (last element)."""
        return self.positions[-1]

    @property
    def neck(self) -> Optional[Position]:
        """The segment right behind the head, if any."""
        return self.positions[1] if len(self.positions) > 1 else None

    def request_direction(self, direction: Direction) -> bool:
        """
        Record a heading change for the next move.

        A heading that would put the head straight back onto the neck is
        ignored. Returns True when the request was accepted.
        """
        if self.neck is not None and self.head.moved(direction) == self.neck:
            return False
        self.pending_direction = direction
        return True

    def commit_direction(self) -> Direction:
        self.direction = self.pending_direction
        return self.direction

    def next_head(self) -> Position:
        return self.head.moved(self.direction)

    def advance(self, new_head: Position, grow: bool = False) -> Optional[Position]:
        """
        Move the head to `new_head`.

        Returns the freed tail cell, or None when the snake grew.
        """
        self.positions.appendleft(new_head)
        if grow:
            return None
        return self.positions.pop()

    def body_hit(self, position: Position, grow: bool = False) -> bool:
        """
        True if moving the head to `position` runs into the body.

        The tail is skipped on a plain move since it leaves its cell in the same step.
        """
        segments: List[Position] = list(self.positions)
        if not grow:
            segments = segments[:-1]
        return position in segments

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head}, length={len(self)}, direction={self.direction.name}>"
