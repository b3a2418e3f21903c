"""
Tests for the domain package: Snake, food placement and GameState.
"""

import os
import random
import sys
from collections import deque
from unittest.mock import Mock

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    UP, DOWN, LEFT, RIGHT, DIRECTIONS, DIRECTION_NAMES, P1, P2,
    Snake, GameState, place_food,
)
from domain.constants import is_opposite, direction_name


class TestDirections:
    """Tests for direction helpers."""

    def test_opposites(self):
        assert is_opposite(UP, DOWN)
        assert is_opposite(LEFT, RIGHT)
        assert not is_opposite(UP, LEFT)
        assert not is_opposite(RIGHT, RIGHT)

    def test_four_unit_vectors(self):
        assert DIRECTIONS == {(0, -1), (0, 1), (-1, 0), (1, 0)}
        assert set(DIRECTION_NAMES.values()) == DIRECTIONS

    def test_direction_name(self):
        assert direction_name(UP) == "UP"
        with pytest.raises(ValueError):
            direction_name((2, 0))


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization(self):
        """Snake initializes alive, with the pending intent equal to its direction."""
        positions = [(5, 5), (4, 5), (3, 5)]
        snake = Snake(positions, RIGHT)

        assert list(snake.body) == positions
        assert isinstance(snake.body, deque)
        assert snake.head == (5, 5)
        assert snake.direction == RIGHT
        assert snake.pending_direction == RIGHT
        assert snake.alive is True
        assert snake.death_reason is None
        assert snake.death_tick is None

    def test_empty_body_raises(self):
        with pytest.raises(ValueError):
            Snake([], RIGHT)

    def test_non_adjacent_body_raises(self):
        with pytest.raises(ValueError):
            Snake([(5, 5), (3, 5)], RIGHT)

    def test_invalid_direction_raises(self):
        with pytest.raises(ValueError):
            Snake([(5, 5)], (1, 1))

    def test_spawn_lays_body_backwards(self):
        """spawn() lays segments behind the head, opposite to the heading."""
        snake = Snake.spawn((19, 12), LEFT)
        assert list(snake.body) == [(19, 12), (20, 12), (21, 12)]

        snake = Snake.spawn((4, 4), DOWN, length=4)
        assert list(snake.body) == [(4, 4), (4, 3), (4, 2), (4, 1)]

    def test_move_without_growth(self):
        snake = Snake([(5, 5), (4, 5), (3, 5)], RIGHT)
        snake.move(snake.next_head())
        assert list(snake.body) == [(6, 5), (5, 5), (4, 5)]

    def test_move_with_growth(self):
        snake = Snake([(5, 5), (4, 5), (3, 5)], RIGHT)
        snake.move((6, 5), grow=True)
        assert list(snake.body) == [(6, 5), (5, 5), (4, 5), (3, 5)]
        assert len(snake) == 4

    def test_kill(self):
        snake = Snake([(5, 5)], UP)
        snake.kill("wall", 7)
        assert snake.alive is False
        assert snake.death_reason == "wall"
        assert snake.death_tick == 7


class TestPlaceFood:
    """Tests for place_food()."""

    def test_never_on_occupied_cell(self):
        rng = random.Random(42)
        occupied = {(x, y) for x in range(10) for y in range(10) if (x + y) % 3}
        for _ in range(200):
            assert place_food(occupied, 10, rng) not in occupied

    def test_single_free_cell_found(self):
        """On a board with one free cell the free cell is returned."""
        occupied = {(x, y) for x in range(5) for y in range(5)} - {(3, 4)}
        assert place_food(occupied, 5, random.Random(0)) == (3, 4)

    def test_falls_back_to_row_major_scan(self):
        """When every random try collides the first free cell in row-major order wins."""
        rng = Mock()
        rng.randint = Mock(return_value=0)
        occupied = {(0, 0), (1, 0), (2, 0)}

        assert place_food(occupied, 5, rng) == (3, 0)
        assert rng.randint.call_count == 2000

    def test_scan_is_row_major(self):
        occupied = {(x, 0) for x in range(4)} | {(0, 1)}
        assert place_food(occupied, 4, random.Random(0), attempts=0) == (1, 1)

    def test_full_grid_returns_origin(self):
        occupied = [(x, y) for x in range(4) for y in range(4)]
        assert place_food(occupied, 4, random.Random(0)) == (0, 0)

    def test_accepts_any_iterable(self):
        segments = iter([(0, 0), (1, 0)])
        assert place_food(segments, 2, random.Random(0), attempts=0) == (0, 1)


def make_state(**overrides):
    values = dict(
        grid_size=10,
        bodies={P1: ((5, 5), (4, 5)), P2: ((2, 2), (2, 1))},
        directions={P1: RIGHT, P2: DOWN},
        alive={P1: True, P2: True},
        death_reasons={P1: None, P2: None},
        food=(7, 7),
        scores={P1: 2, P2: 1},
        food_collected=3,
        running=True,
        paused=False,
        round_number=2,
        tick_number=14,
    )
    values.update(overrides)
    return GameState(**values)


class TestGameState:
    """Tests for the GameState snapshot."""

    def test_print_board_markers(self):
        """Heads, bodies and food are drawn at their cells, row 0 first."""
        rows = make_state().print_board().split("\n")

        # rows[y] is the row for y; cells start after the row label
        row5 = rows[5].split()[1:]
        assert row5[5] == "1"
        assert row5[4] == "a"
        row2 = rows[2].split()[1:]
        assert row2[2] == "2"
        assert rows[1].split()[1:][2] == "b"
        assert rows[7].split()[1:][7] == "F"
        assert len(rows) == 11

    def test_print_board_dead_head(self):
        state = make_state(alive={P1: False, P2: True})
        row5 = state.print_board().split("\n")[5].split()[1:]
        assert row5[5] == "x"

    def test_to_dict(self):
        data = make_state(last_outcome="p1").to_dict()

        assert data["snakes"]["p1"]["body"] == [[5, 5], [4, 5]]
        assert data["snakes"]["p1"]["direction"] == "RIGHT"
        assert data["snakes"]["p2"]["direction"] == "DOWN"
        assert data["food"] == [7, 7]
        assert data["scores"] == {"p1": 2, "p2": 1}
        assert data["food_collected"] == 3
        assert data["last_outcome"] == "p1"
        assert data["running"] is True

    def test_repr(self):
        repr_str = repr(make_state())
        assert "round=2" in repr_str
        assert "tick=14" in repr_str
