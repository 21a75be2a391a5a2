# main.py
import argparse
import curses
import logging
import sys
import time
from typing import Callable, ContextManager, List, Optional

from .config import Config, FOOTER_ROWS, MIN_COLUMNS, MIN_ROWS
from .game import Game, NoFreeCellError
from .terminal import TerminalScreen
from .ui import Key, Screen, ScreenError

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.monotonic() * 1000)


def wait_for_restart(game: Game, screen: Screen) -> bool:
    """Show the game-over banner and block until R (True) or Q/Esc (False)."""
    screen.draw_game_over(game)
    while True:
        key = screen.poll_key(None)
        if key is Key.QUIT:
            return False
        if key is Key.RESTART:
            game.restart()
            return True


def run(game: Game, screen: Screen, clock: Callable[[], int] = now_ms) -> int:
    """
    Drive the game until the player quits. Input is polled and the frame
    redrawn on every pass; the simulation only ticks once the current
    update interval has elapsed. Returns the final score.
    """
    last_update = clock()
    while True:
        # 1) input
        key = screen.poll_key(game.cfg.poll_ms)
        if key is Key.QUIT:
            break
        if key.direction is not None:
            game.snake.change_direction(key.direction)

        # 2) update
        if clock() - last_update >= game.update_interval_ms:
            game.update()
            last_update = clock()

        # 3) render
        screen.draw(game)

        if game.game_over and not wait_for_restart(game, screen):
            break
    return game.score


def open_screen(window: bool) -> ContextManager[Screen]:
    if window:
        from .window import WindowScreen  # pygame is only needed here
        return WindowScreen()
    return TerminalScreen()


def configure_logging(log_file: Optional[str], level: str) -> None:
    # The terminal belongs to curses, so logs only ever go to a file.
    if log_file is None:
        logging.getLogger(__package__).addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Snake in your terminal.")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed food and obstacle placement")
    parser.add_argument("--window", action="store_true",
                        help="play in a pygame window instead of the terminal")
    parser.add_argument("--log-file", default=None,
                        help="write logs here; nothing is logged without it")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="level for --log-file (ignored when no log file is given)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    cfg = Config(seed=args.seed)

    game: Optional[Game] = None
    try:
        with open_screen(args.window) as screen:
            columns, rows = screen.size()
            if columns < MIN_COLUMNS or rows < MIN_ROWS:
                raise ScreenError(
                    f"display is {columns}x{rows}, need at least {MIN_COLUMNS}x{MIN_ROWS}"
                )
            game = Game(columns, rows - FOOTER_ROWS, cfg)
            run(game, screen)
    except KeyboardInterrupt:
        logger.info("interrupted")
    except (ScreenError, NoFreeCellError, curses.error) as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1

    score = game.score if game is not None else 0
    print(f"Thanks for playing! Final score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
