"""
Runtime settings for termsnake.

Values come from the environment (a local .env file is loaded first) and can
be overridden on the command line, see main.py.

    SNAKE_BOARD_SIZE        starting board size, cells per side (default 40)
    SNAKE_REFRESH_INTERVAL  seconds between ticks (default 0.1)
    SNAKE_SEED              seed for candy placement (default: random)
    SNAKE_LOG_FILE          log file, the terminal belongs to the game (default termsnake.log)
    SNAKE_LOG_LEVEL         logging level (default INFO)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain.constants import DEFAULT_BOARD_SIZE, MIN_BOARD_SIZE, REFRESH_INTERVAL

load_dotenv()


@dataclass
class GameConfig:
    board_size: int = DEFAULT_BOARD_SIZE
    interval: float = REFRESH_INTERVAL
    seed: Optional[int] = None
    log_file: str = "termsnake.log"
    log_level: str = "INFO"

    def validate(self) -> "GameConfig":
        if self.board_size < MIN_BOARD_SIZE:
            raise ValueError(f"board size must be at least {MIN_BOARD_SIZE}, got {self.board_size}")
        if self.board_size > DEFAULT_BOARD_SIZE:
            raise ValueError(
                f"board size must be at most {DEFAULT_BOARD_SIZE} to fit the frame, got {self.board_size}"
            )
        if self.interval <= 0:
            raise ValueError(f"refresh interval must be positive, got {self.interval}")
        return self


def load_config() -> GameConfig:
    """Build a GameConfig from the environment."""
    seed = os.getenv("SNAKE_SEED")
    return GameConfig(
        board_size=int(os.getenv("SNAKE_BOARD_SIZE", DEFAULT_BOARD_SIZE)),
        interval=float(os.getenv("SNAKE_REFRESH_INTERVAL", REFRESH_INTERVAL)),
        seed=int(seed) if seed else None,
        log_file=os.getenv("SNAKE_LOG_FILE", "termsnake.log"),
        log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
    )
