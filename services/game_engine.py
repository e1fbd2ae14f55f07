"""
Background tasks driving a game.

start_game() launches a supervisor thread which runs, one after the other:

- game_engine(): a `schedule` job calling GameState.play() every tick and
  pushing the score panel and the sprite diff to the display
- game_over_anim(): the "GAME OVER!!!" scroll in the message view, only when
  the engine ended on a game over

Each task reports exactly once through its own ErrorSlot (None when it ended
cleanly). An unexpected exception inside a task is converted into a
RuntimeFault at the task boundary, shown in the red error panel and reported
through the same slot, so it never takes the process down.
"""

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import schedule

from domain.constants import REFRESH_INTERVAL
from domain.errors import GameOverError, SnakeError, guarded, to_error
from domain.game_state import GameState
from domain.geometry import Size, Sprite
from services.ui_manager import UIManager
from services.views import (
    BOARD_VIEW,
    MESSAGE_VIEW,
    create_score_view,
    update_error_view,
    update_view,
)

logger = logging.getLogger(__name__)

ENGINE_TITLE = "   Game Engine"
ANIM_TITLE = "  Game Over Anim"
START_TITLE = "   Start Game"

SCROLL_MESSAGE = "                    GAME OVER!!!              "
SCROLL_CHUNK_LENGTH = 18
SCROLL_POS_MAX = 16


class ErrorSlot:
    """
    Single-slot channel carrying the outcome of a background task.

    put() blocks while a previous value has not been taken; get() hands the
    value over to the reader.
    """

    def __init__(self):
        self._queue: "queue.Queue[Optional[SnakeError]]" = queue.Queue(maxsize=1)

    def put(self, error: Optional[SnakeError]) -> None:
        self._queue.put(error)

    def get(self, timeout: Optional[float] = None) -> Optional[SnakeError]:
        return self._queue.get(timeout=timeout)


@dataclass
class GameContext:
    """
    State shared between the key handler and the background tasks.

    Each field has a single writer at any time:
        board_size: the key handler (UI thread)
        scroll_over: cleared by start_game() on the UI thread, set again by
            the supervisor once its last task has reported; set means no
            background task is running
        routine_error: the start_game() supervisor thread
    """

    board_size: Size
    interval: float = REFRESH_INTERVAL
    scroll_over: threading.Event = field(default_factory=threading.Event)
    routine_error: Optional[SnakeError] = None
    supervisor: Optional[threading.Thread] = None

    def __post_init__(self):
        self.scroll_over.set()


def run_every(interval: float, job: Callable[[], Optional[object]]) -> None:
    """
    Run `job` every `interval` seconds until it returns schedule.CancelJob.

    The next run is planned only once the previous one returned, so runs
    never overlap. Exceptions raised by `job` stop the loop and propagate.
    """
    scheduler = schedule.Scheduler()
    scheduler.every(interval).seconds.do(job)

    while scheduler.jobs:
        scheduler.run_pending()
        idle = scheduler.idle_seconds
        if idle is not None and idle > 0:
            time.sleep(idle)


def handle_routine_error(ui: UIManager, error_slot: ErrorSlot,
                         error: Optional[SnakeError], title: str) -> None:
    """Show a task error in the error view, then report it through the slot."""
    if error is not None:
        logger.error("%s ended with an error: %s", title.strip(), error)
        try:
            update_error_view(error, ui, title)
        except SnakeError as display_error:
            # The display failure is reported instead of the original error
            logger.error("Could not display the error: %s", display_error)
            error = display_error

    error_slot.put(error)


def game_engine(game_state: GameState, ui: UIManager, error_slot: ErrorSlot,
                interval: float = REFRESH_INTERVAL) -> None:
    """The game loop. Plays one round per tick until the game is over."""
    error: Optional[SnakeError] = None
    try:
        _run_game_loop(game_state, ui, interval)
    except SnakeError as exc:
        error = exc
    finally:
        game_state.set_game_in_progress(False)
        handle_routine_error(ui, error_slot, error, ENGINE_TITLE)


@guarded
def _run_game_loop(game_state: GameState, ui: UIManager, interval: float) -> None:
    def tick():
        try:
            sprite_list = game_state.play()
        except GameOverError as exc:
            logger.info("Game over after %s rounds (score %s): %s",
                        game_state.round_number(), game_state.score(), exc)
            logger.debug("Final board:\n%s", game_state.print_board())
            return schedule.CancelJob

        _publish(game_state, ui, sprite_list)

        if not game_state.game_in_progress():
            return schedule.CancelJob
        return None

    run_every(interval, tick)


@guarded
def _publish(game_state: GameState, ui: UIManager, sprite_list: List[Sprite]) -> None:
    create_score_view(game_state, ui)
    update_view(ui, BOARD_VIEW, sprite_list)


def game_over_anim(ui: UIManager, error_slot: ErrorSlot,
                   interval: float = REFRESH_INTERVAL) -> None:
    """Scroll the game over message once through the message view."""
    error: Optional[SnakeError] = None
    try:
        _run_scroll(ui, interval)
    except SnakeError as exc:
        error = exc
    finally:
        handle_routine_error(ui, error_slot, error, ANIM_TITLE)


@guarded
def _run_scroll(ui: UIManager, interval: float) -> None:
    position = 0

    def tick():
        nonlocal position
        chunk = SCROLL_MESSAGE[position:position + SCROLL_CHUNK_LENGTH]
        ui.update_ln(MESSAGE_VIEW, chunk)

        position += 1
        if position > SCROLL_POS_MAX:
            return schedule.CancelJob
        return None

    run_every(interval, tick)


def _spawn(target, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


@guarded
def start_game(game_state: GameState, ui: UIManager, context: GameContext) -> threading.Thread:
    """
    Start a game and its background tasks.

    context.scroll_over stays cleared from here until the supervisor has
    stored the final error in context.routine_error, so the key handler
    cannot start another game in between.

    Returns the supervisor thread.
    """
    context.scroll_over.clear()
    game_state.start()

    def supervise():
        try:
            engine_slot = ErrorSlot()
            _spawn(game_engine, game_state, ui, engine_slot, context.interval)
            error = engine_slot.get()

            if error is None and not game_state.game_in_progress():
                anim_slot = ErrorSlot()
                _spawn(game_over_anim, ui, anim_slot, context.interval)
                error = anim_slot.get()

            context.routine_error = error
        except Exception as exc:
            handle_panic(ui, context, exc)
        finally:
            context.scroll_over.set()

    context.supervisor = _spawn(supervise)
    return context.supervisor


def handle_panic(ui: UIManager, context: GameContext, payload) -> None:
    """Report a failure of the supervisor itself like any task error."""
    logger.exception("Start game supervisor failed")
    error = to_error(payload, start_game.__qualname__)
    slot = ErrorSlot()
    _spawn(handle_routine_error, ui, slot, error, START_TITLE)
    context.routine_error = slot.get()
