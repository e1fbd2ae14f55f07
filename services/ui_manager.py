"""
Display sink for termsnake.

UIManager is the interface the game talks to. CursesUIManager implements it
on top of the standard curses module, in the spirit of a small view-based
terminal toolkit:

- views are named rectangles with a border, created or resized by set_view()
- set_view_layout(), clear_view() and display_red_layout() write into the
  view buffers right away (under a lock, from any thread)
- update() and update_ln() are queued and applied by the UI thread in
  submission order, on its next loop iteration
- main_loop() owns the terminal: it applies queued updates, redraws and
  dispatches key presses to the registered handler

Only the thread that called open_ui_manager() may call main_loop().
"""

import curses
import logging
import queue
import threading
from enum import Enum
from typing import Callable, Dict, List, Optional

from domain.errors import DisplayError, QuitSignal, guarded
from domain.geometry import Sprite, ViewPosition

logger = logging.getLogger(__name__)


class Key(Enum):
    CTRL_C = "ctrl+c"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    SPACE = "space"
    ENTER = "enter"


KeyHandler = Callable[[Key], None]


class UIManager:
    """
    Base class/interface for the display sink.

    Every method may raise DisplayError.
    """

    def open_ui_manager(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def main_loop(self) -> None:
        """Run until a handler raises (QuitSignal for a normal exit)."""
        raise NotImplementedError

    def update(self, view_name: str, sprite_list: List[Sprite]) -> None:
        """Queue sprite writes to a view."""
        raise NotImplementedError

    def update_ln(self, view_name: str, msg: str) -> None:
        """Queue a write of `msg` on the first line of a view."""
        raise NotImplementedError

    def set_view(self, view_name: str, position: ViewPosition) -> None:
        raise NotImplementedError

    def clear_view(self, view_name: str) -> None:
        raise NotImplementedError

    def display_red_layout(self, view_name: str, layout: List[str]) -> None:
        raise NotImplementedError

    def set_view_layout(self, view_name: str, layout: List[str]) -> None:
        raise NotImplementedError

    def on_key_press(self, fn: KeyHandler) -> None:
        """Attach one handler to every active key."""
        raise NotImplementedError

    def quit(self) -> None:
        """Leave the main loop."""
        raise QuitSignal()


class View:
    """
    A bordered rectangle holding a character buffer.

    Attributes:
        name: view identifier
        position: frame corners, border included
        red: draw with the error colours
    """

    def __init__(self, name: str, position: ViewPosition):
        self.name = name
        self.red = False
        self.position = position
        self.lines: List[List[str]] = []
        self.resize(position)

    @property
    def width(self) -> int:
        return max(self.position.x2 - self.position.x1 - 1, 0)

    @property
    def height(self) -> int:
        return max(self.position.y2 - self.position.y1 - 1, 0)

    def resize(self, position: ViewPosition) -> None:
        """Change the frame, keeping the content that still fits."""
        old = self.lines
        self.position = position
        self.clear()
        for y, row in enumerate(old[:self.height]):
            self.lines[y][:min(len(row), self.width)] = row[:self.width]

    def clear(self) -> None:
        self.lines = [[" "] * self.width for _ in range(self.height)]

    def write(self, x: int, y: int, text: str) -> None:
        """Overwrite from (x, y); characters past the right edge are dropped."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise DisplayError(f"invalid point ({x}, {y}) in view {self.name}")
        row = self.lines[y]
        for offset, ch in enumerate(text[:self.width - x]):
            row[x + offset] = ch

    def text(self) -> List[str]:
        return ["".join(row) for row in self.lines]


class CursesUIManager(UIManager):
    """UIManager drawing to the terminal with curses."""

    POLL_TIMEOUT_MS = 50
    RED_PAIR = 1

    def __init__(self):
        self._screen = None
        self._lock = threading.RLock()
        self._views: Dict[str, View] = {}
        self._updates: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self._handler: Optional[KeyHandler] = None
        self._key_map: Dict[int, Key] = {}

    @guarded
    def open_ui_manager(self) -> None:
        try:
            screen = curses.initscr()
            curses.noecho()
            # raw mode so ctrl+c arrives as a key instead of SIGINT
            curses.raw()
            screen.keypad(True)
            screen.timeout(self.POLL_TIMEOUT_MS)
            if curses.has_colors():
                curses.start_color()
                curses.init_pair(self.RED_PAIR, curses.COLOR_WHITE, curses.COLOR_RED)
        except curses.error as exc:
            raise DisplayError(f"cannot open the terminal: {exc}") from exc

        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")

        self._screen = screen
        self._key_map = {
            3: Key.CTRL_C,
            curses.KEY_UP: Key.ARROW_UP,
            curses.KEY_DOWN: Key.ARROW_DOWN,
            curses.KEY_LEFT: Key.ARROW_LEFT,
            curses.KEY_RIGHT: Key.ARROW_RIGHT,
            ord(" "): Key.SPACE,
            ord("\n"): Key.ENTER,
            ord("\r"): Key.ENTER,
            curses.KEY_ENTER: Key.ENTER,
        }
        logger.info("Terminal opened")

    def close(self) -> None:
        if self._screen is None:
            return
        self._screen.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
        self._screen = None
        logger.info("Terminal closed")

    @guarded
    def main_loop(self) -> None:
        if self._screen is None:
            raise DisplayError("the terminal is not open")

        while True:
            self.flush_updates()
            self._draw()
            ch = self._screen.getch()
            if ch == -1:
                continue
            key = self._key_map.get(ch)
            if key is not None and self._handler is not None:
                self._handler(key)

    @guarded
    def update(self, view_name: str, sprite_list: List[Sprite]) -> None:
        view = self._view(view_name)
        sprites = list(sprite_list)
        self._updates.put(lambda: self._display_sprites(view, sprites))

    @guarded
    def update_ln(self, view_name: str, msg: str) -> None:
        view = self._view(view_name)
        self._updates.put(lambda: self._write_ln(view, msg))

    @guarded
    def flush_updates(self) -> None:
        """Apply every queued update, oldest first."""
        while True:
            try:
                apply = self._updates.get_nowait()
            except queue.Empty:
                return
            with self._lock:
                apply()

    def _display_sprites(self, view: View, sprites: List[Sprite]) -> None:
        for sprite in sprites:
            x, y = sprite.position
            view.write(x, y, sprite.value)

    def _write_ln(self, view: View, msg: str) -> None:
        view.write(0, 0, msg)

    @guarded
    def set_view(self, view_name: str, position: ViewPosition) -> None:
        position = ViewPosition(*position)
        with self._lock:
            view = self._views.get(view_name)
            if view is None:
                self._views[view_name] = View(view_name, position)
            elif view.position != position:
                view.resize(position)

    @guarded
    def clear_view(self, view_name: str) -> None:
        with self._lock:
            self._view(view_name).clear()

    @guarded
    def display_red_layout(self, view_name: str, layout: List[str]) -> None:
        with self._lock:
            view = self._view(view_name)
            self._write_layout(view, layout)
            view.red = True

    @guarded
    def set_view_layout(self, view_name: str, layout: List[str]) -> None:
        with self._lock:
            self._write_layout(self._view(view_name), layout)

    def _write_layout(self, view: View, layout: List[str]) -> None:
        view.clear()
        for y, line in enumerate(layout):
            if y >= view.height:
                raise DisplayError(f"invalid point (0, {y}) in view {view.name}")
            if line:
                view.write(0, y, line)

    @guarded
    def on_key_press(self, fn: KeyHandler) -> None:
        self._handler = fn

    def view_text(self, view_name: str) -> List[str]:
        """Current content of a view, one string per row."""
        with self._lock:
            return self._view(view_name).text()

    def _view(self, view_name: str) -> View:
        view = self._views.get(view_name)
        if view is None:
            raise DisplayError(f"unknown view {view_name}")
        return view

    def _draw(self) -> None:
        screen = self._screen
        max_y, max_x = screen.getmaxyx()
        red = curses.color_pair(self.RED_PAIR) if curses.has_colors() else curses.A_REVERSE

        with self._lock:
            screen.erase()
            for view in self._views.values():
                x1, y1, x2, y2 = view.position
                # Stay off the last column and row so curses never scrolls
                if x2 >= max_x - 1 or y2 >= max_y - 1:
                    raise DisplayError(
                        f"terminal too small ({max_x}x{max_y}) for view {view.name}"
                    )
                attr = red if view.red else curses.A_NORMAL
                horizontal = "+" + "-" * view.width + "+"
                screen.addstr(y1, x1, horizontal)
                screen.addstr(y2, x1, horizontal)
                for row, text in enumerate(view.text(), start=y1 + 1):
                    screen.addstr(row, x1, "|")
                    screen.addstr(row, x1 + 1, text, attr)
                    screen.addstr(row, x2, "|")
            screen.refresh()
