# game.py
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Iterator, List, NamedTuple, Optional
import logging
import random

from .config import PLAYFIELD_TOP, UP, DOWN, LEFT, RIGHT, Config, CFG

logger = logging.getLogger(__name__)


class NoFreeCellError(RuntimeError):
    """Raised when rejection sampling cannot find an unoccupied cell."""


# ---------- Value types ----------
class Direction(Enum):
    UP = UP
    DOWN = DOWN
    LEFT = LEFT
    RIGHT = RIGHT

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction) -> "Position":
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


# ---------- Snake ----------
class Snake:
    """Body is a deque with the head at index 0."""

    def __init__(self, start: Position, direction: Direction = Direction.RIGHT):
        self.body: Deque[Position] = deque([start])
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.body)

    def __contains__(self, cell: object) -> bool:
        return cell in self.body

    @property
    def head(self) -> Position:
        return self.body[0]

    def next_head(self, width: int, height: int) -> Optional[Position]:
        """Cell the head would enter next, or None if a wall is in the way."""
        head = self.head
        if self.direction is Direction.UP and head.y <= PLAYFIELD_TOP:
            return None
        if self.direction is Direction.DOWN and head.y >= height - 1:
            return None
        if self.direction is Direction.LEFT and head.x <= 0:
            return None
        if self.direction is Direction.RIGHT and head.x >= width - 1:
            return None
        return head.step(self.direction)

    def move(self, width: int, height: int) -> bool:
        """
        Push a new head in the current direction. Returns False when blocked
        by a wall or by the body (tail included, it has not moved yet).
        The tail is left in place; callers shrink() unless the snake ate.
        """
        new_head = self.next_head(width, height)
        if new_head is None or new_head in self.body:
            return False
        self.body.appendleft(new_head)
        return True

    def grow(self) -> None:
        # move() already added a cell; growing means skipping shrink()
        pass

    def shrink(self) -> None:
        self.body.pop()

    def change_direction(self, new_direction: Direction) -> None:
        if not is_opposite(new_direction, self.direction):
            self.direction = new_direction


# ---------- Food / obstacles ----------
@dataclass(frozen=True)
class Food:
    position: Position
    points: int


@dataclass(frozen=True)
class Obstacle:
    position: Position


def random_cell(width: int, height: int, rng: random.Random) -> Position:
    return Position(rng.randrange(width), rng.randrange(PLAYFIELD_TOP, height))


def sample_free_cell(
    width: int,
    height: int,
    rng: random.Random,
    is_free: Callable[[Position], bool],
    max_attempts: int,
) -> Position:
    for _ in range(max_attempts):
        cell = random_cell(width, height, rng)
        if is_free(cell):
            return cell
    raise NoFreeCellError(
        f"no free cell in a {width}x{height} grid after {max_attempts} attempts"
    )


def in_keep_out(cell: Position, center: Position, radius: int) -> bool:
    return abs(cell.x - center.x) <= radius and abs(cell.y - center.y) <= radius


def spawn_food(
    width: int,
    height: int,
    snake: Snake,
    obstacles: List[Obstacle],
    rng: random.Random,
    cfg: Config = CFG,
) -> Food:
    blocked = {obstacle.position for obstacle in obstacles}
    position = sample_free_cell(
        width, height, rng,
        lambda cell: cell not in snake and cell not in blocked,
        cfg.max_placement_attempts,
    )
    points = rng.randint(cfg.min_food_points, cfg.max_food_points)
    return Food(position, points)


def spawn_obstacles(
    width: int,
    height: int,
    snake: Snake,
    center: Position,
    rng: random.Random,
    cfg: Config = CFG,
) -> List[Obstacle]:
    """
    Place between cfg.min_obstacles and cfg.max_obstacles obstacles outside
    the keep-out box around `center` and off the snake. Obstacles may share
    a cell with each other.
    """
    count = rng.randint(cfg.min_obstacles, cfg.max_obstacles)
    obstacles = []
    for _ in range(count):
        position = sample_free_cell(
            width, height, rng,
            lambda cell: cell not in snake and not in_keep_out(cell, center, cfg.keep_out),
            cfg.max_placement_attempts,
        )
        obstacles.append(Obstacle(position))
    return obstacles


# ---------- State ----------
class GameStatus(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class Collision(Enum):
    WALL = "wall"
    SELF = "self"
    OBSTACLE = "obstacle"
    BOARD_FULL = "board_full"


class Game:
    snake: Snake
    food: Food
    obstacles: List[Obstacle]
    score: int
    speed_level: int
    status: GameStatus
    collision: Optional[Collision]

    def __init__(
        self,
        width: int,
        height: int,
        cfg: Config = CFG,
        rng: Optional[random.Random] = None,
    ):
        # the spawn row (height // 2) must lie inside the playfield
        if width < 1 or height // 2 < PLAYFIELD_TOP:
            raise ValueError(f"grid {width}x{height} is too small to spawn in")
        self.width = width
        self.height = height
        self.cfg = cfg
        self.rng = rng if rng is not None else random.Random(cfg.seed)
        self.restart()

    @property
    def start(self) -> Position:
        return Position(self.width // 2, self.height // 2)

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def update_interval_ms(self) -> int:
        decrease = (self.speed_level - 1) * self.cfg.interval_step_ms
        return max(self.cfg.min_interval_ms, self.cfg.base_interval_ms - decrease)

    def restart(self) -> None:
        self.snake = Snake(self.start)
        self.obstacles = spawn_obstacles(
            self.width, self.height, self.snake, self.start, self.rng, self.cfg
        )
        self.food = spawn_food(
            self.width, self.height, self.snake, self.obstacles, self.rng, self.cfg
        )
        self.score = 0
        self.speed_level = 1
        self.status = GameStatus.RUNNING
        self.collision = None
        logger.info(
            "new game %dx%d: %d obstacles, food at %s",
            self.width, self.height, len(self.obstacles), self.food.position,
        )

    def update(self) -> None:
        """Advance one tick. Does nothing once the game is over."""
        if self.game_over:
            return

        if not self.snake.move(self.width, self.height):
            hit_wall = self.snake.next_head(self.width, self.height) is None
            self._end(Collision.WALL if hit_wall else Collision.SELF)
            return

        head = self.snake.head
        if any(obstacle.position == head for obstacle in self.obstacles):
            self._end(Collision.OBSTACLE)
            return

        if head == self.food.position:
            self.score += self.food.points
            self.snake.grow()
            self.speed_level += 1
            logger.debug(
                "ate %d pts at %s, score=%d level=%d",
                self.food.points, head, self.score, self.speed_level,
            )
            try:
                self.food = spawn_food(
                    self.width, self.height, self.snake, self.obstacles, self.rng, self.cfg
                )
            except NoFreeCellError:
                self._end(Collision.BOARD_FULL)
        else:
            self.snake.shrink()

    def _end(self, collision: Collision) -> None:
        self.status = GameStatus.GAME_OVER
        self.collision = collision
        logger.info(
            "game over (%s) at %s, score=%d", collision.value, self.snake.head, self.score
        )
