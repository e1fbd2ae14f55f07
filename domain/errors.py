"""
Error taxonomy for termsnake and the `guarded` wrapper.

Every guarded function prepends its qualified name to the trace of any
SnakeError passing through it, so the final message reads as a call chain:

    start_game: GameState.play: GameBoard.move_snake: wall collision at (10, 5)

Anything that is not a SnakeError (an unexpected failure) is converted into a
RuntimeFault at the first guarded frame it crosses, tagged with that frame's
name, and the original exception is kept as __cause__.
"""

import functools
from typing import Any, Callable, List, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


class SnakeError(Exception):
    """Base class for every error raised by the game."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message
        self.trace: List[str] = []

    def add_origin(self, name: str) -> None:
        """Record one more frame of the call chain (outermost first)."""
        if not self.trace or self.trace[0] != name:
            self.trace.insert(0, name)

    def __str__(self) -> str:
        return ": ".join(self.trace + [self.message])


class ValidationError(SnakeError):
    """Bad size or position input."""


class InvalidSnakeReferenceError(SnakeError):
    """The snake was queried before it was created."""


class GameOverError(SnakeError):
    """An expected terminal condition: the round ends, the process does not."""


class WallCollisionError(GameOverError):
    pass


class SelfCollisionError(GameOverError):
    pass


class NoFreeSpaceError(GameOverError):
    """The board has no empty cell left."""


class DisplayError(SnakeError):
    """The display sink failed."""


class RuntimeFault(SnakeError):
    """An unexpected failure recovered at a guarded boundary."""

    PREFIX = "runtime error"

    def __init__(self, message: str = "", origin: Optional[str] = None):
        super().__init__(f"{self.PREFIX}: {message}" if message else self.PREFIX)
        if origin:
            self.add_origin(origin)


class QuitSignal(SnakeError):
    """Raised to leave the UI main loop. Not a failure."""

    def __init__(self, message: str = "quit"):
        super().__init__(message)


def to_error(payload: Any, origin: Optional[str] = None) -> SnakeError:
    """
    Turn whatever a failing task left behind into a SnakeError.

    SnakeErrors are kept as they are, other exceptions and plain strings
    become a RuntimeFault carrying their text.
    """
    if isinstance(payload, SnakeError):
        err = payload
        if origin:
            err.add_origin(origin)
        return err

    if isinstance(payload, BaseException):
        text = str(payload) or payload.__class__.__name__
        fault = RuntimeFault(text, origin)
        fault.__cause__ = payload
        return fault

    if isinstance(payload, str):
        return RuntimeFault(payload, origin)

    return RuntimeFault(repr(payload), origin)


def guarded(func: F) -> F:
    """Tag errors leaving `func` with its name and convert unexpected failures."""
    name = func.__qualname__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SnakeError as exc:
            exc.add_origin(name)
            raise
        except Exception as exc:
            raise to_error(exc, name) from exc

    return wrapper  # type: ignore[return-value]
