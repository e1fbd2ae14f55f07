"""
GameState - plays the rounds on top of a GameBoard.
"""

import logging
import random
import threading
from typing import List, Optional

from .constants import DOWN, LEFT, RIGHT, UP, Occupant
from .errors import GameOverError, NoFreeSpaceError, guarded
from .game_board import GameBoard
from .geometry import Position, Size, Sprite

logger = logging.getLogger(__name__)


class GameState:
    """
    Round bookkeeping around a GameBoard.

    Attributes are private; the board is reachable only through the methods
    below. The in-progress and dirty flags are threading.Event objects since
    the engine thread writes them while the UI thread reads them.

    Flags:
        in progress: set by start(), cleared when play() hits a terminal condition
        dirty: set until init_board() succeeds, and again after a game over
    """

    def __init__(self, game_board: Optional[GameBoard] = None, rng: Optional[random.Random] = None):
        self._game_board = game_board or GameBoard(rng=rng)
        self._lock = threading.Lock()
        self._round = 0
        self._score = 0
        self._high_score = 0
        self._in_progress = threading.Event()
        self._dirty = threading.Event()
        self._dirty.set()

    @guarded
    def init_board(self, size: Size) -> None:
        """(Re)create the board. Leaves the state dirty if it fails."""
        self._dirty.set()
        self._game_board.init_game_board(size)
        self._dirty.clear()
        logger.info("Board initialized to %s", Size(*size))

    @guarded
    def create_objects(self) -> List[Sprite]:
        """Spawn the snake at the centre heading right, then the candy."""
        width, height = self._game_board.board_size()
        snake_sprite = self._game_board.create_snake(Position(width // 2, height // 2), RIGHT)
        candy_sprite = self._game_board.create_candy()
        return [snake_sprite, candy_sprite]

    def start(self) -> None:
        with self._lock:
            self._round = 0
            self._score = 0
        self._in_progress.set()
        logger.info("Game started on a %s board", self._game_board.board_size())

    @guarded
    def play(self) -> List[Sprite]:
        """
        Play one round: move the snake once.

        Returns:
            The sprites to redraw.

        Raises:
            GameOverError: the round is over; in-progress is already cleared.
        """
        try:
            result = self._game_board.move_snake()
        except NoFreeSpaceError:
            # The candy that filled the board was eaten
            self._add_point()
            self._end_round()
            raise
        except GameOverError:
            self._end_round()
            raise

        with self._lock:
            self._round += 1
        if result.occupant is Occupant.CANDY:
            self._add_point()

        return result.sprites

    def _add_point(self) -> None:
        with self._lock:
            self._score += 1
            if self._score > self._high_score:
                self._high_score = self._score

    def _end_round(self) -> None:
        self._in_progress.clear()
        self._dirty.set()

    # Direction requests, applied on the next play()
    def move_up(self) -> None:
        self._game_board.set_snake_direction(UP)

    def move_down(self) -> None:
        self._game_board.set_snake_direction(DOWN)

    def move_left(self) -> None:
        self._game_board.set_snake_direction(LEFT)

    def move_right(self) -> None:
        self._game_board.set_snake_direction(RIGHT)

    def game_in_progress(self) -> bool:
        return self._in_progress.is_set()

    def set_game_in_progress(self, in_progress: bool) -> None:
        if in_progress:
            self._in_progress.set()
        else:
            self._in_progress.clear()

    def dirty(self) -> bool:
        return self._dirty.is_set()

    def board_size(self) -> Size:
        return self._game_board.board_size()

    @guarded
    def snake_size(self) -> int:
        return self._game_board.snake_size()

    @guarded
    def snake_position(self) -> Position:
        return self._game_board.snake_position()

    def round_number(self) -> int:
        with self._lock:
            return self._round

    def score(self) -> int:
        with self._lock:
            return self._score

    def high_score(self) -> int:
        with self._lock:
            return self._high_score

    def print_board(self) -> str:
        return self._game_board.print_board()

    def __repr__(self):
        return (
            f"<GameState round={self.round_number()}, score={self.score()}, "
            f"high_score={self.high_score()}, in_progress={self.game_in_progress()}>"
        )
