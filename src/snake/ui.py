# ui.py
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from .config import TITLE, GAME_OVER_TEXT, RESTART_PROMPT
from .game import Direction, Game


class ScreenError(RuntimeError):
    """The display backend could not be set up or is unusable."""


class Key(Enum):
    NONE = "none"        # poll timed out
    MOVE_UP = "up"
    MOVE_DOWN = "down"
    MOVE_LEFT = "left"
    MOVE_RIGHT = "right"
    QUIT = "quit"
    RESTART = "restart"
    OTHER = "other"

    @property
    def direction(self) -> Optional[Direction]:
        return _KEY_DIRECTIONS.get(self)


_KEY_DIRECTIONS = {
    Key.MOVE_UP: Direction.UP,
    Key.MOVE_DOWN: Direction.DOWN,
    Key.MOVE_LEFT: Direction.LEFT,
    Key.MOVE_RIGHT: Direction.RIGHT,
}

CHAR_BINDINGS = {
    "w": Key.MOVE_UP,
    "s": Key.MOVE_DOWN,
    "a": Key.MOVE_LEFT,
    "d": Key.MOVE_RIGHT,
    "q": Key.QUIT,
    "\x1b": Key.QUIT,
    "r": Key.RESTART,
}


def key_for_char(ch: str) -> Key:
    """Map a typed character to a Key (letters are case-insensitive)."""
    return CHAR_BINDINGS.get(ch.lower(), Key.OTHER)


class Screen(Protocol):
    """What the main loop needs from a display backend."""

    def size(self) -> Tuple[int, int]:
        """Usable (columns, rows) of the display."""
        ...

    def draw(self, game: Game) -> None:
        ...

    def draw_game_over(self, game: Game) -> None:
        ...

    def poll_key(self, timeout_ms: Optional[int]) -> Key:
        """Wait up to timeout_ms for a key (forever if None); Key.NONE on timeout."""
        ...


# ---------- Text shared by the backends ----------
def status_line(game: Game) -> str:
    return f"{TITLE} | Score: {game.score} | Food: {game.food.points} pts"


def game_over_lines(game: Game) -> List[Tuple[str, str]]:
    """(text, color name) rows shown centred over the board after a collision."""
    return [
        (GAME_OVER_TEXT, "red"),
        (f"Final score: {game.score}", "white"),
        (RESTART_PROMPT, "cyan"),
    ]
