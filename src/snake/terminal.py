# terminal.py
import curses
import locale
import logging
from typing import Dict, Optional, Tuple

from .config import (
    PLAYFIELD_TOP, RULE_GLYPH, HEAD_GLYPH, BODY_GLYPH, FOOD_GLYPH,
    OBSTACLE_GLYPH, OBSTACLE_GLYPH_ASCII, HINT,
)
from .game import Game
from .ui import Key, ScreenError, key_for_char, status_line, game_over_lines

logger = logging.getLogger(__name__)

ESC_DELAY_MS = 25

# color name -> (pair number, curses foreground)
COLOR_PAIRS = {
    "white": (1, curses.COLOR_WHITE),
    "yellow": (2, curses.COLOR_YELLOW),
    "green": (3, curses.COLOR_GREEN),
    "red": (4, curses.COLOR_RED),
    "cyan": (5, curses.COLOR_CYAN),
}

SPECIAL_KEYS = {
    curses.KEY_UP: Key.MOVE_UP,
    curses.KEY_DOWN: Key.MOVE_DOWN,
    curses.KEY_LEFT: Key.MOVE_LEFT,
    curses.KEY_RIGHT: Key.MOVE_RIGHT,
}


def key_from_code(code: int) -> Key:
    """Translate a getch() result into a Key."""
    if code == -1:
        return Key.NONE
    if code in SPECIAL_KEYS:
        return SPECIAL_KEYS[code]
    if 0 <= code < 256:
        return key_for_char(chr(code))
    return Key.OTHER


def can_encode(text: str) -> bool:
    try:
        text.encode(locale.getpreferredencoding(False))
    except (UnicodeEncodeError, LookupError):
        return False
    return True


class TerminalScreen:
    """
    curses display and keyboard. Use as a context manager: entering switches
    to the alternate screen with echo off, unbuffered keys and a hidden
    cursor; leaving restores the terminal even when the body raised.
    """

    def __init__(self) -> None:
        self.stdscr: Optional["curses.window"] = None
        self.obstacle_glyph = OBSTACLE_GLYPH
        self._attrs: Dict[str, int] = {}

    def __enter__(self) -> "TerminalScreen":
        locale.setlocale(locale.LC_ALL, "")
        try:
            self.stdscr = curses.initscr()
        except curses.error as exc:
            raise ScreenError(f"cannot initialise terminal: {exc}") from exc
        try:
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            curses.set_escdelay(ESC_DELAY_MS)
            curses.curs_set(0)
            self._init_colors()
        except curses.error as exc:
            self._restore()
            raise ScreenError(f"cannot set up terminal: {exc}") from exc
        except BaseException:
            self._restore()
            raise
        if not can_encode(OBSTACLE_GLYPH):
            self.obstacle_glyph = OBSTACLE_GLYPH_ASCII
        logger.info("terminal ready: %dx%d, colors=%s", *self.size(), bool(self._attrs))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._restore()

    def _restore(self) -> None:
        if self.stdscr is None:
            return
        self.stdscr.keypad(False)
        curses.echo()
        curses.nocbreak()
        curses.endwin()
        self.stdscr = None

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        for name, (pair, fg) in COLOR_PAIRS.items():
            curses.init_pair(pair, fg, curses.COLOR_BLACK)
            self._attrs[name] = curses.color_pair(pair)

    # ---------- Drawing ----------
    def _put(self, y: int, x: int, text: str, color: str, extra: int = 0) -> None:
        """addstr clipped to the window; curses rejects the bottom-right cell."""
        rows, cols = self.stdscr.getmaxyx()
        if not (0 <= y < rows and 0 <= x < cols):
            return
        room = cols - x - (1 if y == rows - 1 else 0)
        text = text[:room]
        if text:
            self.stdscr.addstr(y, x, text, self._attrs.get(color, curses.A_NORMAL) | extra)

    def size(self) -> Tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return cols, rows

    def draw(self, game: Game) -> None:
        self.stdscr.erase()
        self._put(PLAYFIELD_TOP - 1, 0, RULE_GLYPH * game.width, "white")
        self._put(0, 0, status_line(game), "yellow")

        for i, segment in enumerate(game.snake):
            glyph = HEAD_GLYPH if i == 0 else BODY_GLYPH
            self._put(segment.y, segment.x, glyph, "green")

        food = game.food.position
        self._put(food.y, food.x, FOOD_GLYPH, "red")

        for obstacle in game.obstacles:
            pos = obstacle.position
            self._put(pos.y, pos.x, self.obstacle_glyph, "red", curses.A_DIM)

        self._put(game.height, 0, HINT, "cyan")
        self.stdscr.refresh()

    def draw_game_over(self, game: Game) -> None:
        top = game.height // 2
        for i, (text, color) in enumerate(game_over_lines(game)):
            x = max(0, (game.width - len(text)) // 2)
            self._put(top + i, x, text, color, curses.A_BOLD if i == 0 else 0)
        self.stdscr.refresh()

    # ---------- Input ----------
    def poll_key(self, timeout_ms: Optional[int]) -> Key:
        self.stdscr.timeout(-1 if timeout_ms is None else timeout_ms)
        return key_from_code(self.stdscr.getch())
