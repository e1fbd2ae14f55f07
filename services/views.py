"""
Screen layout of termsnake.

    +--------------------------------------------+--------------------+
    | board view (size follows the board)        | score view         |
    |                                            +--------------------+
    |                                            | message view       |
    |                                            +--------------------+
    |                                            | error view         |
    |                                            +--------------------+
    |                                            | help view          |
    +--------------------------------------------+--------------------+
"""

from typing import List

from domain.errors import InvalidSnakeReferenceError, guarded
from domain.game_state import GameState
from domain.geometry import Size, Sprite, ViewPosition
from services.ui_manager import UIManager

BOARD_VIEW = "boardView"
SCORE_VIEW = "scoreView"
MESSAGE_VIEW = "messageView"
ERROR_VIEW = "errorView"
HELP_VIEW = "helpView"
GAME_FRAME = "frameView"
PANEL_VIEW = "panelView"

LEFT_MOST = 0
RIGHT_PANEL = 43
MAX_X = 63
TOP_MOST = 0
TOP_MESSAGE_VIEW = 11
TOP_ERROR_VIEW = 14
TOP_HELP_VIEW = 27
MAX_Y = 41

ERROR_VIEW_WIDTH = MAX_X - RIGHT_PANEL - 2
ERROR_LINES = 4

HELP_LAYOUT = [
    "  The Snake Game",
    "GRAB the * CANDIES",
    "",
    "select board size",
    "   with ENTER",
    "",
    " SPACEBAR to start",
    "",
    "Keys:  BOTTOM, UP",
    "      LEFT, RIGHT",
    "",
    "",
    "  Ctrl+C to Quit",
]


@guarded
def create_views(game_state: GameState, ui: UIManager, board_size: Size) -> None:
    """Create every view, back to front."""
    create_game_frame(ui)
    create_panel_view(ui)
    create_error_view(ui)
    create_help_view(ui)
    create_score_view(game_state, ui)
    create_message_view(ui)
    create_board_view(ui, board_size)


@guarded
def clear_view(ui: UIManager, view_name: str) -> None:
    ui.clear_view(view_name)


@guarded
def update_view(ui: UIManager, view_name: str, sprite_list: List[Sprite]) -> None:
    ui.update(view_name, sprite_list)


@guarded
def create_game_frame(ui: UIManager) -> None:
    ui.set_view(GAME_FRAME, ViewPosition(LEFT_MOST, TOP_MOST, MAX_X, MAX_Y))


@guarded
def create_panel_view(ui: UIManager) -> None:
    ui.set_view(PANEL_VIEW, ViewPosition(RIGHT_PANEL, TOP_MOST, MAX_X, MAX_Y))


@guarded
def create_error_view(ui: UIManager) -> None:
    ui.set_view(ERROR_VIEW, ViewPosition(RIGHT_PANEL, TOP_ERROR_VIEW, MAX_X, TOP_HELP_VIEW - 1))


@guarded
def create_board_view(ui: UIManager, board_size: Size) -> None:
    width, height = board_size
    ui.set_view(BOARD_VIEW, ViewPosition(LEFT_MOST, TOP_MOST, width + 1, height + 1))


@guarded
def create_message_view(ui: UIManager) -> None:
    ui.set_view(MESSAGE_VIEW, ViewPosition(RIGHT_PANEL, TOP_MESSAGE_VIEW, MAX_X, TOP_ERROR_VIEW - 1))


@guarded
def create_help_view(ui: UIManager) -> None:
    ui.set_view(HELP_VIEW, ViewPosition(RIGHT_PANEL, TOP_HELP_VIEW, MAX_X, MAX_Y))
    ui.set_view_layout(HELP_VIEW, HELP_LAYOUT)


@guarded
def create_score_view(game_state: GameState, ui: UIManager) -> None:
    """(Re)draw the score panel from the current game state."""
    ui.set_view(SCORE_VIEW, ViewPosition(RIGHT_PANEL, TOP_MOST, MAX_X, TOP_MESSAGE_VIEW - 1))

    # Before the snake exists the panel shows defaults
    try:
        snake_size = str(game_state.snake_size())
        snake_position = str(game_state.snake_position())
    except InvalidSnakeReferenceError:
        snake_size = "0"
        snake_position = ""

    ui.set_view_layout(SCORE_VIEW, [
        f" GAME BOARD {game_state.board_size()}",
        "",
        f"ROUND: {game_state.round_number()}",
        "",
        f"CANDIES: {game_state.score()}",
        f"SNAKE SIZE:{snake_size}",
        f"POSITION:{snake_position}",
        "",
        f"TOP SCORE: {game_state.high_score()}",
    ])


@guarded
def update_error_view(error: BaseException, ui: UIManager, title: str) -> None:
    """Show `error` in red in the error view, wrapped to the panel width."""
    lines = chunks(str(error), ERROR_VIEW_WIDTH, ERROR_LINES)

    ui.display_red_layout(ERROR_VIEW, [
        "",
        "",
        "   Program Error",
        "",
        title,
        "     crashed",
        "",
        lines[0],
        lines[1],
        lines[2],
        lines[3],
    ])


def chunks(text: str, chunk_length: int, nb_chunks: int) -> List[str]:
    """
    Split `text` into pieces of `chunk_length` characters.

    The last piece may be shorter. Empty strings are appended until there
    are at least `nb_chunks` pieces; nothing is ever dropped, so a long text
    gives more than `nb_chunks` pieces. A non-positive `chunk_length` keeps
    the text whole.

    >>> chunks("0123456789", 3, 4)
    ['012', '345', '678', '9']
    """
    pieces = [text]
    if chunk_length > 0:
        while len(pieces[-1]) > chunk_length:
            last = pieces.pop()
            pieces.extend([last[:chunk_length], last[chunk_length:]])

    while len(pieces) < nb_chunks:
        pieces.append("")

    return pieces
