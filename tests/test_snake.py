from collections import deque

import pytest

from snake.game import Direction, Position, Snake, is_opposite

W, H = 10, 10


def make_snake(*cells, direction=Direction.RIGHT):
    snake = Snake(Position(*cells[0]), direction)
    snake.body = deque(Position(*c) for c in cells)
    return snake


@pytest.mark.parametrize("current,requested", [
    (Direction.UP, Direction.LEFT),
    (Direction.UP, Direction.RIGHT),
    (Direction.DOWN, Direction.LEFT),
    (Direction.LEFT, Direction.UP),
    (Direction.RIGHT, Direction.DOWN),
    (Direction.RIGHT, Direction.RIGHT),
])
def test_non_reversing_turn_is_applied(current, requested):
    snake = Snake(Position(5, 5), current)
    snake.change_direction(requested)
    assert snake.direction is requested


@pytest.mark.parametrize("current", list(Direction))
def test_reversal_is_ignored(current):
    snake = Snake(Position(5, 5), current)
    snake.change_direction(current.opposite)
    assert snake.direction is current
    assert is_opposite(current, current.opposite)


def test_last_turn_before_tick_wins():
    snake = make_snake((5, 5), (4, 5))
    snake.change_direction(Direction.UP)
    snake.change_direction(Direction.DOWN)  # opposite of UP, dropped
    assert snake.direction is Direction.UP

    snake.change_direction(Direction.LEFT)  # no longer a reversal of UP
    assert snake.direction is Direction.LEFT


def test_double_turn_can_steer_into_neck():
    snake = make_snake((5, 5), (4, 5))
    snake.change_direction(Direction.UP)
    snake.change_direction(Direction.LEFT)
    assert not snake.move(W, H)


def test_move_pushes_head_and_keeps_tail():
    snake = Snake(Position(5, 5))
    assert snake.move(W, H)
    assert list(snake) == [Position(6, 5), Position(5, 5)]
    snake.shrink()
    assert list(snake) == [Position(6, 5)]


def test_grow_does_not_change_body():
    snake = make_snake((5, 5), (4, 5))
    snake.grow()
    assert len(snake) == 2


@pytest.mark.parametrize("start,direction", [
    ((5, 2), Direction.UP),
    ((5, H - 1), Direction.DOWN),
    ((0, 5), Direction.LEFT),
    ((W - 1, 5), Direction.RIGHT),
])
def test_wall_blocks_move(start, direction):
    snake = Snake(Position(*start), direction)
    assert snake.next_head(W, H) is None
    assert not snake.move(W, H)
    assert list(snake) == [Position(*start)]


@pytest.mark.parametrize("start,direction,expected", [
    ((5, 3), Direction.UP, (5, 2)),
    ((5, H - 2), Direction.DOWN, (5, H - 1)),
    ((1, 5), Direction.LEFT, (0, 5)),
    ((W - 2, 5), Direction.RIGHT, (W - 1, 5)),
])
def test_move_up_to_the_wall_is_allowed(start, direction, expected):
    snake = Snake(Position(*start), direction)
    assert snake.move(W, H)
    assert snake.head == Position(*expected)


def test_moving_into_body_is_blocked():
    snake = make_snake((5, 5), (6, 5), (6, 6), (5, 6), (4, 6), direction=Direction.DOWN)
    assert not snake.move(W, H)
    assert len(snake) == 5


def test_moving_into_the_tail_is_blocked_even_though_it_would_vacate():
    # square loop: head at (5,5), tail at (4,5) just left of it
    snake = make_snake((5, 5), (5, 6), (4, 6), (4, 5), direction=Direction.LEFT)
    assert snake.next_head(W, H) == Position(4, 5)
    assert not snake.move(W, H)
