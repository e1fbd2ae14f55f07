"""
GameBoard - owns the board, the snake and the candy.

It is the only place where spatial state changes. Every public method takes
the board lock, so a tick running on the engine thread and a query coming
from the UI thread never see a half-applied move.
"""

import random
import threading
from typing import List, NamedTuple, Optional

from .board import Board
from .candy import Candy
from .constants import Direction, Occupant
from .errors import (
    InvalidSnakeReferenceError,
    SelfCollisionError,
    ValidationError,
    WallCollisionError,
    guarded,
)
from .geometry import Position, Size, Sprite
from .snake import Snake


class MoveResult(NamedTuple):
    """Outcome of one snake step."""

    occupant: Occupant  # what was in the cell the head moved into
    sprites: List[Sprite]


class GameBoard:
    """
    Composition root of the spatial model.

    The snake and candy are replaced, never reused, each time the board is
    initialized again.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._lock = threading.RLock()
        self._board = Board(rng=rng)
        self._snake: Optional[Snake] = None
        self._candy = Candy()

    @guarded
    def init_game_board(self, size: Size) -> None:
        with self._lock:
            self._board.init_game_board(Size(*size))
            self._snake = None
            self._candy = Candy()

    def board_size(self) -> Size:
        with self._lock:
            return self._board.size

    @guarded
    def random_free_position(self) -> Position:
        with self._lock:
            return self._board.random_free_position()

    # --------------------------------------------------
    # Snake
    # --------------------------------------------------
    @guarded
    def create_snake(self, position: Position, direction: Direction) -> Sprite:
        """Place a one-segment snake and return the sprite to draw."""
        with self._lock:
            position = Position(*position)
            if not self._board.in_bounds(position):
                raise ValidationError(f"snake position {position} is out of bounds")
            if self._board.occupant(position) is not Occupant.EMPTY:
                raise ValidationError(f"snake position {position} is occupied")

            if self._snake is not None:
                for segment in self._snake.positions:
                    self._board.set_occupant(segment, Occupant.EMPTY)

            self._snake = Snake([position], direction)
            self._board.set_occupant(position, Occupant.SNAKE_BODY)
            return Sprite(position, Occupant.SNAKE_BODY.glyph)

    def set_snake_direction(self, direction: Direction) -> None:
        with self._lock:
            if self._snake is not None:
                self._snake.request_direction(direction)

    @guarded
    def snake_size(self) -> int:
        with self._lock:
            return len(self._require_snake())

    @guarded
    def snake_position(self) -> Position:
        with self._lock:
            return self._require_snake().head

    def snake_positions(self) -> List[Position]:
        with self._lock:
            return list(self._snake.positions) if self._snake else []

    def _require_snake(self) -> Snake:
        if self._snake is None:
            raise InvalidSnakeReferenceError("the snake has not been created")
        return self._snake

    # --------------------------------------------------
    # Candy
    # --------------------------------------------------
    @guarded
    def create_candy(self) -> Sprite:
        """Put the candy on a random free cell and return the sprite to draw."""
        with self._lock:
            position = self._board.random_free_position()
            if self._candy.alive:
                self._board.set_occupant(self._candy.position, Occupant.EMPTY)
            self._candy.place(position)
            self._board.set_occupant(position, Occupant.CANDY)
            return Sprite(position, Occupant.CANDY.glyph)

    @guarded
    def place_candy(self, position: Position) -> Sprite:
        """Move the candy to a chosen cell. The previous candy is removed first."""
        with self._lock:
            position = Position(*position)
            if not self._board.in_bounds(position):
                raise ValidationError(f"candy position {position} is out of bounds")
            # The current candy's own cell counts as free
            own_cell = self._candy.alive and self._candy.position == position
            if not own_cell and self._board.occupant(position) is not Occupant.EMPTY:
                raise ValidationError(f"candy position {position} is occupied")
            self.remove_candy()
            self._candy.place(position)
            self._board.set_occupant(position, Occupant.CANDY)
            return Sprite(position, Occupant.CANDY.glyph)

    def remove_candy(self) -> None:
        with self._lock:
            if self._candy.alive:
                self._board.set_occupant(self._candy.position, Occupant.EMPTY)
                self._candy.consume()

    def candy_alive(self) -> bool:
        with self._lock:
            return self._candy.alive

    def candy_position(self) -> Optional[Position]:
        with self._lock:
            return self._candy.position

    @staticmethod
    def is_candy(ch: str) -> bool:
        return Board.is_candy(ch)

    @staticmethod
    def is_snake_part(ch: str) -> bool:
        return Board.is_snake_part(ch)

    # --------------------------------------------------
    # Movement
    # --------------------------------------------------
    @guarded
    def move_snake(self) -> MoveResult:
        """
        Advance the snake one cell along its heading.

        Returns:
            MoveResult with the occupant found at the new head cell and the
            sprites to redraw (freed tail, new head, relocated candy).

        Raises:
            WallCollisionError: the head left the board.
            SelfCollisionError: the head ran into the body.
            NoFreeSpaceError: the candy was eaten and no free cell is left for it.
        """
        with self._lock:
            snake = self._require_snake()
            snake.commit_direction()
            new_head = snake.next_head()

            if not self._board.in_bounds(new_head):
                raise WallCollisionError(f"wall collision at {new_head}")

            occupant = self._board.occupant(new_head)
            grow = self._candy.alive and self._candy.position == new_head

            if snake.body_hit(new_head, grow):
                raise SelfCollisionError(f"self collision at {new_head}")

            sprites: List[Sprite] = []
            freed = snake.advance(new_head, grow)

            # The tail cell can be the new head cell when the snake chases its tail
            if freed is not None and freed != new_head:
                self._board.set_occupant(freed, Occupant.EMPTY)
                sprites.append(Sprite(freed, Occupant.EMPTY.glyph))

            self._board.set_occupant(new_head, Occupant.SNAKE_BODY)
            sprites.append(Sprite(new_head, Occupant.SNAKE_BODY.glyph))

            if grow:
                self._candy.consume()
                sprites.append(self.create_candy())

            return MoveResult(occupant, sprites)

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        * = candy
        # = snake body
        @ = snake head
        """
        with self._lock:
            width, height = self._board.size
            rows = [['.' for _ in range(width)] for _ in range(height)]

            if self._candy.alive:
                cx, cy = self._candy.position
                rows[cy][cx] = Occupant.CANDY.glyph

            if self._snake is not None:
                for idx, (x, y) in enumerate(self._snake.positions):
                    rows[y][x] = '@' if idx == 0 else Occupant.SNAKE_BODY.glyph

            return "\n".join("".join(row) for row in rows)

    def __repr__(self):
        return f"<GameBoard size={self.board_size()}, snake={self._snake}, candy={self._candy}>"
