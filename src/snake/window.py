# window.py
import logging
from typing import Optional, Tuple

import pygame # type: ignore

from .config import (
    CELL_SIZE, WINDOW_COLUMNS, WINDOW_ROWS, PLAYFIELD_TOP, TITLE, HINT,
    BG, WHITE, YELLOW, GREEN, RED, DARK_RED, CYAN,
)
from .game import Game
from .ui import Key, ScreenError, key_for_char, status_line, game_over_lines

logger = logging.getLogger(__name__)

HEAD_GREEN = (140, 240, 140)

COLORS = {"white": WHITE, "yellow": YELLOW, "green": GREEN, "red": RED, "cyan": CYAN}

SPECIAL_KEYS = {
    pygame.K_UP: Key.MOVE_UP,
    pygame.K_DOWN: Key.MOVE_DOWN,
    pygame.K_LEFT: Key.MOVE_LEFT,
    pygame.K_RIGHT: Key.MOVE_RIGHT,
    pygame.K_ESCAPE: Key.QUIT,
}


def key_from_event(event: pygame.event.Event) -> Key:
    if event.type == pygame.NOEVENT:
        return Key.NONE
    if event.type == pygame.QUIT:
        return Key.QUIT
    if event.type != pygame.KEYDOWN:
        return Key.OTHER
    if event.key in SPECIAL_KEYS:
        return SPECIAL_KEYS[event.key]
    if len(event.unicode) == 1:
        return key_for_char(event.unicode)
    return Key.OTHER


class WindowScreen:
    """Same contract as TerminalScreen, drawn as coloured cells in a pygame window."""

    def __init__(self, columns: int = WINDOW_COLUMNS, rows: int = WINDOW_ROWS,
                 cell_size: int = CELL_SIZE) -> None:
        self.columns = columns
        self.rows = rows
        self.cell_size = cell_size
        self.screen: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None

    def __enter__(self) -> "WindowScreen":
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (self.columns * self.cell_size, self.rows * self.cell_size)
            )
            pygame.display.set_caption(TITLE)
            self.font = pygame.font.SysFont(None, self.cell_size + 4)
        except pygame.error as exc:
            pygame.quit()
            raise ScreenError(f"cannot open window: {exc}") from exc
        logger.info("window ready: %dx%d cells", self.columns, self.rows)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        pygame.quit()

    def size(self) -> Tuple[int, int]:
        return self.columns, self.rows

    # ---------- Drawing ----------
    def draw_cell(self, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
        rect = pygame.Rect(gx * self.cell_size, gy * self.cell_size, self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, color, rect)

    def draw_text(self, gx: int, gy: int, text: str, color: Tuple[int, int, int]) -> None:
        txt = self.font.render(text, True, color)
        self.screen.blit(txt, (gx * self.cell_size + 4, gy * self.cell_size + 2))

    def draw(self, game: Game) -> None:
        self.screen.fill(BG)
        rule_y = PLAYFIELD_TOP * self.cell_size - 2
        pygame.draw.line(self.screen, WHITE, (0, rule_y), (self.screen.get_width(), rule_y))
        self.draw_text(0, 0, status_line(game), YELLOW)

        head, *body = list(game.snake)
        for x, y in body:
            self.draw_cell(x, y, GREEN)
        self.draw_cell(head.x, head.y, HEAD_GREEN)

        self.draw_cell(game.food.position.x, game.food.position.y, RED)
        for obstacle in game.obstacles:
            self.draw_cell(obstacle.position.x, obstacle.position.y, DARK_RED)

        self.draw_text(0, game.height, HINT, CYAN)
        pygame.display.flip()

    def draw_game_over(self, game: Game) -> None:
        # Dim with translucent overlay
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))  # RGBA
        self.screen.blit(overlay, (0, 0))

        center_x = self.screen.get_width() // 2
        top = (game.height // 2) * self.cell_size
        for i, (text, color) in enumerate(game_over_lines(game)):
            txt = self.font.render(text, True, COLORS[color])
            self.screen.blit(txt, txt.get_rect(center=(center_x, top + i * (self.cell_size + 8))))
        pygame.display.flip()

    # ---------- Input ----------
    def poll_key(self, timeout_ms: Optional[int]) -> Key:
        if timeout_ms is None:
            event = pygame.event.wait()
        else:
            event = pygame.event.wait(timeout_ms)
        return key_from_event(event)
