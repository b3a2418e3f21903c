"""
Food placement for the round engine.
"""

import random
from typing import Iterable, Optional, Tuple

from .constants import FOOD_PLACEMENT_ATTEMPTS


def place_food(
    occupied: Iterable[Tuple[int, int]],
    grid_size: int,
    rng: Optional[random.Random] = None,
    attempts: int = FOOD_PLACEMENT_ATTEMPTS,
) -> Tuple[int, int]:
    """
    Return a cell (x, y) not occupied by any snake segment.

    Random cells are tried first. If every attempt lands on an occupied cell
    (only plausible on a near-full board) the grid is scanned row by row and
    the first free cell wins. A completely full grid yields (0, 0).

    Args:
        occupied: every segment of every snake, heads included
        grid_size: the board is grid_size x grid_size cells
        rng: random source (defaults to the module-level generator)
        attempts: how many random cells to try before scanning

    Returns:
        The chosen (x, y) cell
    """
    rng = rng or random
    taken = set(occupied)

    for _ in range(attempts):
        x = rng.randint(0, grid_size - 1)
        y = rng.randint(0, grid_size - 1)
        if (x, y) not in taken:
            return (x, y)

    # Fallback: first empty cell in row-major order
    for y in range(grid_size):
        for x in range(grid_size):
            if (x, y) not in taken:
                return (x, y)

    return (0, 0)
