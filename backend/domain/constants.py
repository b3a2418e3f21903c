"""
Game constants for SnakeDuel.
"""

# Movement directions as (dx, dy) unit vectors. Screen coordinates: y grows downward.
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
DIRECTIONS = {UP, DOWN, LEFT, RIGHT}

# Wire names for the four directions
DIRECTION_NAMES = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}

# Player tags
P1 = "p1"
P2 = "p2"
PLAYERS = (P1, P2)

# Round outcomes
DRAW = "draw"

# Death reasons, in the order they are checked
DEATH_HEAD_ON = "head_on"
DEATH_WALL = "wall"
DEATH_SELF = "self"
DEATH_OTHER = "other"

# Game settings (kept in code, not env vars)
START_LEN = 3
WIN_BONUS = 3
FOOD_PLACEMENT_ATTEMPTS = 1000


def is_opposite(a, b) -> bool:
    """Two directions are opposite when their components cancel out."""
    return a[0] + b[0] == 0 and a[1] + b[1] == 0


def direction_name(direction) -> str:
    for name, vector in DIRECTION_NAMES.items():
        if vector == direction:
            return name
    raise ValueError(f"Not a direction: {direction!r}")
