"""
termsnake - a terminal snake game.

The main module wires the pieces together: it opens the terminal, builds the
views, creates the first board, and hands control to the UI main loop. Key
presses all go to handle_key_press(), which receives the shared GameContext
instead of closing over local variables.

The game itself runs on background threads started by start_game(); their
errors come back through context.routine_error and are printed when the
program ends.
"""

import argparse
import logging
import random
import sys
from typing import List, Optional, TextIO

from config import GameConfig, load_config
from domain.constants import DEFAULT_BOARD_SIZE, MIN_BOARD_SIZE, SIZE_INCREMENT
from domain.errors import QuitSignal, RuntimeFault, SnakeError, guarded, to_error
from domain.game_state import GameState
from domain.geometry import Size
from services.game_engine import GameContext, start_game
from services.ui_manager import CursesUIManager, Key, UIManager
from services.views import (
    BOARD_VIEW,
    clear_view,
    create_board_view,
    create_score_view,
    create_views,
    update_view,
)

logger = logging.getLogger(__name__)


def toggle_board_view_size(board_size: Size) -> Size:
    """Cycle the board size through 10, 20, 30 and 40 cells per side."""
    if board_size.width < DEFAULT_BOARD_SIZE:
        width = min(board_size.width + SIZE_INCREMENT, DEFAULT_BOARD_SIZE)
        height = min(board_size.height + SIZE_INCREMENT, DEFAULT_BOARD_SIZE)
        return Size(width, height)
    return Size(SIZE_INCREMENT, SIZE_INCREMENT)


@guarded
def init_game(game_state: GameState, board_size: Size) -> None:
    game_state.init_board(board_size)


@guarded
def display_players(game_state: GameState, ui: UIManager) -> None:
    """Create the snake and the candy and draw them."""
    sprite_list = game_state.create_objects()
    update_view(ui, BOARD_VIEW, sprite_list)


@guarded
def prepare_game(game_state: GameState, ui: UIManager, context: GameContext) -> None:
    """Build a fresh board of context.board_size and redraw it."""
    init_game(game_state, context.board_size)
    create_board_view(ui, context.board_size)
    clear_view(ui, BOARD_VIEW)
    display_players(game_state, ui)
    create_score_view(game_state, ui)


@guarded
def handle_key_press(game_state: GameState, ui: UIManager, key: Key, context: GameContext) -> None:
    """Single handler for every active key."""
    if key is Key.CTRL_C:
        ui.quit()
    elif key is Key.ARROW_UP:
        game_state.move_up()
    elif key is Key.ARROW_DOWN:
        game_state.move_down()
    elif key is Key.ARROW_LEFT:
        game_state.move_left()
    elif key is Key.ARROW_RIGHT:
        game_state.move_right()
    elif key is Key.SPACE:
        if not game_state.game_in_progress() and context.scroll_over.is_set():
            if game_state.dirty():
                prepare_game(game_state, ui, context)
            start_game(game_state, ui, context)
    elif key is Key.ENTER:
        if not game_state.game_in_progress() and context.scroll_over.is_set():
            context.board_size = toggle_board_view_size(context.board_size)
            logger.info("Board size switched to %s", context.board_size)
            prepare_game(game_state, ui, context)


@guarded
def set_event_handler(game_state: GameState, ui: UIManager, context: GameContext) -> None:
    def handler(key: Key) -> None:
        handle_key_press(game_state, ui, key, context)

    ui.on_key_press(handler)


def report_error(error: Optional[SnakeError], routine_error: Optional[SnakeError],
                 stream: Optional[TextIO] = None) -> int:
    """
    Print what ended the program and return the exit code.

    An error coming from the background tasks wins over the main loop one.
    QuitSignal is the normal way out and is not printed.
    """
    stream = stream or sys.stderr
    if routine_error is not None:
        error = routine_error

    if error is None or isinstance(error, QuitSignal):
        return 0

    if isinstance(error, RuntimeFault):
        print("Panic occurred", file=stream)
    print(error, file=stream)
    return 1


def run(config: GameConfig) -> int:
    game_state = GameState(rng=random.Random(config.seed))
    ui = CursesUIManager()
    context = GameContext(
        board_size=Size(config.board_size, config.board_size),
        interval=config.interval,
    )

    error: Optional[SnakeError] = None
    try:
        ui.open_ui_manager()
        try:
            init_game(game_state, context.board_size)
            create_views(game_state, ui, context.board_size)
            clear_view(ui, BOARD_VIEW)
            display_players(game_state, ui)
            set_event_handler(game_state, ui, context)
            # Runs until ctrl+c raises QuitSignal
            ui.main_loop()
        finally:
            ui.close()
    except SnakeError as exc:
        error = exc
    except Exception as exc:
        logger.exception("Unexpected failure in the main loop")
        error = to_error(exc, run.__qualname__)

    if error is not None and not isinstance(error, QuitSignal):
        logger.error("Main loop ended with an error: %s", error)
    return report_error(error, context.routine_error)


def parse_args(argv: Optional[List[str]] = None) -> GameConfig:
    defaults = load_config()

    parser = argparse.ArgumentParser(description="Play snake in the terminal.")
    parser.add_argument("--size", type=int, default=defaults.board_size,
                        help=f"Board width and height in cells ({MIN_BOARD_SIZE} to {DEFAULT_BOARD_SIZE})")
    parser.add_argument("--interval", type=float, default=defaults.interval,
                        help="Seconds between two moves of the snake")
    parser.add_argument("--seed", type=int, default=defaults.seed,
                        help="Seed for candy placement")
    parser.add_argument("--log-file", type=str, default=defaults.log_file,
                        help="Where to write the log")
    parser.add_argument("--log-level", type=str, default=defaults.log_level,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    config = GameConfig(
        board_size=args.size,
        interval=args.interval,
        seed=args.seed,
        log_file=args.log_file,
        log_level=args.log_level.upper(),
    )
    try:
        return config.validate()
    except ValueError as exc:
        parser.error(str(exc))


def setup_logging(config: GameConfig) -> None:
    logging.basicConfig(
        filename=config.log_file,
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)
    setup_logging(config)
    logger.info("Starting termsnake: board %sx%s, interval %ss",
                config.board_size, config.board_size, config.interval)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
