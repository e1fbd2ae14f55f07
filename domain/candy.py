"""
Candy entity - the single item the snake eats.
"""

from typing import Optional

from .geometry import Position


class Candy:
    """
    Attributes:
        position: where the candy sits, None before the first placement
        alive: False once eaten and until it is placed again
    """

    def __init__(self, position: Optional[Position] = None):
        self.position = position
        self.alive = position is not None

    def place(self, position: Position) -> None:
        self.position = position
        self.alive = True

    def consume(self) -> None:
        self.alive = False

    def __repr__(self):
        return f"<Candy position={self.position}, alive={self.alive}>"
