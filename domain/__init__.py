"""
Domain entities for the termsnake game engine.

This module contains the core game entities that are independent of
display concerns (terminal, views, key bindings).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    Direction, Occupant,
    DEFAULT_BOARD_SIZE, MIN_BOARD_SIZE, SIZE_INCREMENT, REFRESH_INTERVAL,
)
from .errors import (
    SnakeError,
    ValidationError,
    InvalidSnakeReferenceError,
    GameOverError,
    WallCollisionError,
    SelfCollisionError,
    NoFreeSpaceError,
    DisplayError,
    RuntimeFault,
    QuitSignal,
    guarded,
    to_error,
)
from .geometry import Position, Size, Sprite, ViewPosition
from .board import Board
from .snake import Snake
from .candy import Candy
from .game_board import GameBoard, MoveResult
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'Direction', 'Occupant',
    'DEFAULT_BOARD_SIZE', 'MIN_BOARD_SIZE', 'SIZE_INCREMENT', 'REFRESH_INTERVAL',
    'SnakeError', 'ValidationError', 'InvalidSnakeReferenceError',
    'GameOverError', 'WallCollisionError', 'SelfCollisionError',
    'NoFreeSpaceError', 'DisplayError', 'RuntimeFault', 'QuitSignal',
    'guarded', 'to_error',
    'Position', 'Size', 'Sprite', 'ViewPosition',
    'Board',
    'Snake',
    'Candy',
    'GameBoard', 'MoveResult',
    'GameState',
]
