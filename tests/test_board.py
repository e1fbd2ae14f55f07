"""
Tests for the leaf entities: Board, Snake and Candy.
"""

import pytest
import random
import sys
import os
from collections import deque

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    Board,
    Candy,
    Snake,
    Occupant,
    Position,
    Size,
    NoFreeSpaceError,
    ValidationError,
    UP, DOWN, LEFT, RIGHT,
)


class TestBoard:
    """Tests for the Board class."""

    def test_init_marks_every_cell_empty(self):
        """A fresh board has width x height empty cells."""
        board = Board(Size(4, 3))

        assert board.size == Size(4, 3)
        assert len(board.free_cells()) == 12
        assert board.occupant(Position(3, 2)) is Occupant.EMPTY

    def test_init_resets_previous_content(self):
        """init_game_board() wipes the grid, even when the size changes."""
        board = Board(Size(4, 4))
        board.set_occupant(Position(1, 1), Occupant.SNAKE_BODY)

        board.init_game_board(Size(2, 2))

        assert board.size == Size(2, 2)
        assert len(board.free_cells()) == 4
        assert not board.in_bounds(Position(3, 3))

    @pytest.mark.parametrize("size", [Size(0, 10), Size(10, 0), Size(-1, 5)])
    def test_init_rejects_non_positive_size(self, size):
        """Board sizes with a non-positive dimension raise ValidationError."""
        board = Board()

        with pytest.raises(ValidationError):
            board.init_game_board(size)

    def test_out_of_bounds_access_raises(self):
        """Cells outside the board are never read or stored."""
        board = Board(Size(3, 3))

        with pytest.raises(ValidationError):
            board.occupant(Position(3, 0))
        with pytest.raises(ValidationError):
            board.set_occupant(Position(-1, 0), Occupant.CANDY)

        assert len(board.free_cells()) == 9

    def test_random_free_position_with_one_free_cell(self):
        """With a single empty cell, that cell is always returned."""
        board = Board(Size(3, 1), rng=random.Random(7))
        board.set_occupant(Position(0, 0), Occupant.SNAKE_BODY)
        board.set_occupant(Position(2, 0), Occupant.CANDY)

        for _ in range(20):
            assert board.random_free_position() == Position(1, 0)

    def test_random_free_position_full_board_raises(self):
        """A saturated board raises NoFreeSpaceError."""
        board = Board(Size(2, 1))
        board.set_occupant(Position(0, 0), Occupant.SNAKE_BODY)
        board.set_occupant(Position(1, 0), Occupant.SNAKE_BODY)

        with pytest.raises(NoFreeSpaceError):
            board.random_free_position()

    def test_random_free_position_is_seeded(self):
        """The same seed gives the same sequence of cells."""
        first = Board(Size(10, 10), rng=random.Random(42))
        second = Board(Size(10, 10), rng=random.Random(42))

        picks_first = [first.random_free_position() for _ in range(5)]
        picks_second = [second.random_free_position() for _ in range(5)]

        assert picks_first == picks_second

    def test_glyph_queries(self):
        """is_candy/is_snake_part classify rendered glyphs."""
        assert Board.is_candy("*")
        assert not Board.is_candy("#")
        assert Board.is_snake_part("#")
        assert not Board.is_snake_part(" ")


class TestDirection:
    """Tests for Direction."""

    def test_opposites(self):
        assert UP.opposite is DOWN
        assert LEFT.opposite is RIGHT
        assert RIGHT.delta == (1, 0)

    def test_position_moved(self):
        assert Position(3, 3).moved(UP) == (3, 2)
        assert Position(3, 3).moved(DOWN) == (3, 4)
        assert str(Position(3, 3)) == "(3, 3)"


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization_with_single_position(self):
        """Snake initializes with a single position and a heading."""
        snake = Snake([(5, 5)], RIGHT)
        assert list(snake.positions) == [Position(5, 5)]
        assert snake.direction is RIGHT
        assert snake.pending_direction is RIGHT
        assert snake.neck is None

    def test_snake_positions_is_deque(self):
        """Snake positions are stored as a deque for efficient operations."""
        snake = Snake([(5, 5)], UP)
        assert isinstance(snake.positions, deque)

    def test_snake_needs_a_segment(self):
        """An empty snake cannot be built."""
        with pytest.raises(ValueError):
            Snake([], UP)

    def test_head_and_tail(self):
        """head is the first segment, tail the last."""
        snake = Snake([(5, 5), (4, 5), (3, 5)], RIGHT)
        assert snake.head == (5, 5)
        assert snake.tail == (3, 5)
        assert snake.neck == (4, 5)

    def test_reverse_request_is_ignored(self):
        """Turning back onto the neck is rejected."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)

        assert snake.request_direction(LEFT) is False
        assert snake.pending_direction is RIGHT

    def test_reverse_after_quick_turn_is_ignored(self):
        """Two quick presses within one tick cannot fold the snake onto itself."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)

        assert snake.request_direction(UP) is True
        assert snake.request_direction(LEFT) is False
        assert snake.pending_direction is UP

    def test_single_segment_can_reverse(self):
        """A one-segment snake may go any way."""
        snake = Snake([(5, 5)], RIGHT)

        assert snake.request_direction(LEFT) is True
        assert snake.commit_direction() is LEFT
        assert snake.next_head() == (4, 5)

    def test_advance_moves_or_grows(self):
        """advance() drops the tail unless the snake grows."""
        snake = Snake([(5, 5), (4, 5)], RIGHT)

        freed = snake.advance(Position(6, 5))
        assert freed == (4, 5)
        assert list(snake.positions) == [(6, 5), (5, 5)]

        freed = snake.advance(Position(7, 5), grow=True)
        assert freed is None
        assert list(snake.positions) == [(7, 5), (6, 5), (5, 5)]

    def test_body_hit_skips_tail_on_plain_move(self):
        """The tail cell is free on a plain move, not on a growth move."""
        snake = Snake([(5, 5), (5, 6), (4, 6), (4, 5)], UP)

        assert snake.body_hit(Position(4, 5)) is False
        assert snake.body_hit(Position(4, 5), grow=True) is True
        assert snake.body_hit(Position(5, 6)) is True


class TestCandy:
    """Tests for the Candy class."""

    def test_candy_lifecycle(self):
        """A candy is alive once placed and dead once consumed."""
        candy = Candy()
        assert candy.alive is False

        candy.place(Position(1, 2))
        assert candy.alive is True
        assert candy.position == (1, 2)

        candy.consume()
        assert candy.alive is False
        assert candy.position == (1, 2)
