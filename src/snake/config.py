from dataclasses import dataclass
from typing import Optional

# ----- Grid layout (terminal rows) -----
PLAYFIELD_TOP = 2     # rows 0-1 hold the status line and the rule
FOOTER_ROWS = 2       # reserved below the playfield for the hint line
MIN_COLUMNS, MIN_ROWS = 20, 12

# ----- Window backend -----
CELL_SIZE = 20
WINDOW_COLUMNS, WINDOW_ROWS = 40, 30

# ----- Glyphs -----
RULE_GLYPH = "-"
HEAD_GLYPH = "O"
BODY_GLYPH = "o"
FOOD_GLYPH = "@"
OBSTACLE_GLYPH = "■"
OBSTACLE_GLYPH_ASCII = "#"   # for terminals that cannot encode the block

# ----- Colors (RGB, used by the window backend) -----
BG        = (20, 20, 24)
WHITE     = (220, 220, 230)
YELLOW    = (230, 200, 60)
GREEN     = (80, 200, 80)
RED       = (200, 70, 70)
DARK_RED  = (120, 30, 30)
CYAN      = (70, 190, 200)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Text -----
TITLE = "Snake"
HINT = "WASD/arrows to move | Q to quit | Avoid walls and obstacles!"
GAME_OVER_TEXT = "GAME OVER!"
RESTART_PROMPT = "R to restart | Q to quit"

# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    seed: Optional[int] = None
    base_interval_ms: int = 200
    interval_step_ms: int = 15
    min_interval_ms: int = 50
    poll_ms: int = 100
    min_obstacles: int = 5
    max_obstacles: int = 8
    keep_out: int = 2
    min_food_points: int = 1
    max_food_points: int = 5
    max_placement_attempts: int = 10_000

CFG = Config()
