"""
Tests for GameState: round bookkeeping, scoring and flags.
"""

import pytest
import random
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    GameBoard,
    GameState,
    InvalidSnakeReferenceError,
    NoFreeSpaceError,
    Position,
    SelfCollisionError,
    Size,
    Sprite,
    ValidationError,
    WallCollisionError,
    RIGHT,
)


def make_state(size=Size(10, 10), seed=3):
    board = GameBoard(rng=random.Random(seed))
    state = GameState(game_board=board)
    state.init_board(size)
    return state, board


class TestGameStateFlags:
    """Tests for the dirty and in-progress flags."""

    def test_new_state_is_dirty(self):
        """A state with no board yet is dirty and not in progress."""
        state = GameState()

        assert state.dirty() is True
        assert state.game_in_progress() is False

    def test_init_board_clears_dirty(self):
        """A successful init_board() clears the dirty flag."""
        state, _ = make_state()

        assert state.dirty() is False
        assert state.board_size() == Size(10, 10)

    def test_failed_init_leaves_dirty(self):
        """An invalid size keeps the state dirty."""
        state, _ = make_state()

        with pytest.raises(ValidationError) as exc_info:
            state.init_board(Size(0, 0))

        assert state.dirty() is True
        assert str(exc_info.value).startswith("GameState.init_board: GameBoard.init_game_board")

    def test_start_resets_counters(self):
        """start() zeroes round and score and raises the in-progress flag."""
        state, board = make_state()
        board.create_snake(Position(5, 5), RIGHT)
        board.place_candy(Position(6, 5))
        state.start()
        state.play()
        assert state.score() == 1

        state.start()

        assert state.round_number() == 0
        assert state.score() == 0
        assert state.high_score() == 1
        assert state.game_in_progress() is True

    def test_set_game_in_progress(self):
        """set_game_in_progress() toggles the flag both ways."""
        state = GameState()

        state.set_game_in_progress(True)
        assert state.game_in_progress() is True
        state.set_game_in_progress(False)
        assert state.game_in_progress() is False


class TestGameStatePlay:
    """Tests for play()."""

    def test_play_eats_candy(self):
        """Eating the candy scores a point and grows the snake."""
        state, board = make_state()
        board.create_snake(Position(5, 5), RIGHT)
        board.place_candy(Position(6, 5))
        state.start()

        sprites = state.play()

        assert state.round_number() == 1
        assert state.score() == 1
        assert state.high_score() == 1
        assert state.snake_size() == 2
        assert state.snake_position() == (6, 5)
        assert sprites[0] == Sprite(Position(6, 5), "#")

    def test_play_plain_move(self):
        """A move without candy counts a round and no point."""
        state, board = make_state()
        board.create_snake(Position(5, 5), RIGHT)
        state.start()

        state.play()

        assert state.round_number() == 1
        assert state.score() == 0

    def test_wall_ends_the_round(self):
        """A wall hit clears in-progress, marks the state dirty and re-raises."""
        state, board = make_state()
        board.create_snake(Position(9, 5), RIGHT)
        state.start()

        with pytest.raises(WallCollisionError) as exc_info:
            state.play()

        assert state.game_in_progress() is False
        assert state.dirty() is True
        assert str(exc_info.value).startswith("GameState.play: GameBoard.move_snake")

    def test_self_collision_ends_the_round(self):
        """A self collision ends the round like a wall hit."""
        state, board = make_state()
        board.create_snake(Position(2, 2), RIGHT)
        for x in (3, 4, 5, 6):
            board.place_candy(Position(x, 2))
            board.move_snake()
        board.remove_candy()
        state.start()

        state.move_down()
        state.play()
        state.move_left()
        state.play()
        state.move_up()
        with pytest.raises(SelfCollisionError):
            state.play()

        assert state.game_in_progress() is False

    def test_filling_the_board_scores(self):
        """The candy that fills the board still counts."""
        state, board = make_state(Size(2, 1))
        board.create_snake(Position(0, 0), RIGHT)
        board.create_candy()
        state.start()

        with pytest.raises(NoFreeSpaceError):
            state.play()

        assert state.score() == 1
        assert state.game_in_progress() is False

    def test_high_score_never_decreases(self):
        """high_score keeps the best score across games."""
        state, board = make_state()
        board.create_snake(Position(2, 2), RIGHT)
        state.start()
        for x in (3, 4):
            board.place_candy(Position(x, 2))
            state.play()
        assert state.high_score() == 2

        state.init_board(Size(10, 10))
        state.create_objects()
        state.start()

        assert state.score() == 0
        assert state.high_score() == 2

    def test_direction_helpers(self):
        """move_up() and friends steer the next play()."""
        state, board = make_state()
        board.create_snake(Position(5, 5), RIGHT)
        state.start()

        state.move_up()
        state.play()
        assert state.snake_position() == (5, 4)

        state.move_left()
        state.play()
        assert state.snake_position() == (4, 4)


class TestGameStateObjects:
    """Tests for create_objects() and the snake queries."""

    def test_snake_queries_before_creation(self):
        """snake_size()/snake_position() fail until the snake exists."""
        state, _ = make_state()

        with pytest.raises(InvalidSnakeReferenceError) as exc_info:
            state.snake_size()
        assert str(exc_info.value).startswith("GameState.snake_size: GameBoard.snake_size")

        with pytest.raises(InvalidSnakeReferenceError):
            state.snake_position()

    def test_create_objects_spawns_in_the_centre(self):
        """The snake starts in the middle of the board, the candy elsewhere."""
        state, board = make_state(Size(20, 20))

        sprites = state.create_objects()

        assert sprites[0] == Sprite(Position(10, 10), "#")
        assert sprites[1].value == "*"
        assert sprites[1].position != Position(10, 10)
        assert board.candy_position() == sprites[1].position
        assert state.snake_size() == 1
