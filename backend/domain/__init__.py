"""
Domain entities for the SnakeDuel round engine.

This module contains the core game entities that are independent of
infrastructure concerns (scheduling, HTTP, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, DIRECTIONS, DIRECTION_NAMES,
    P1, P2, PLAYERS, DRAW,
    START_LEN, WIN_BONUS, FOOD_PLACEMENT_ATTEMPTS,
)
from .snake import Snake
from .food import place_food
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'DIRECTIONS', 'DIRECTION_NAMES',
    'P1', 'P2', 'PLAYERS', 'DRAW',
    'START_LEN', 'WIN_BONUS', 'FOOD_PLACEMENT_ATTEMPTS',
    'Snake',
    'place_food',
    'GameState',
]
