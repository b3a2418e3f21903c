"""
Snake entity for the round engine.
"""

from collections import deque
from typing import List, Tuple, Optional

from .constants import DIRECTIONS, START_LEN


class Snake:
    """
    Represents a snake on the board.

    Attributes:
        body: deque of (x, y) from head at index 0 to tail at the end
        direction: direction committed on the last tick
        pending_direction: most recently requested direction, committed on the
            next tick unless it reverses `direction`
        alive: whether this snake is still alive
        death_reason: e.g., 'head_on', 'wall', 'self', 'other'
        death_tick: The tick number on which the snake died
    """

    def __init__(self, body: List[Tuple[int, int]], direction: Tuple[int, int]):
        if not body:
            raise ValueError("A snake needs at least one body segment.")
        if direction not in DIRECTIONS:
            raise ValueError(f"Invalid direction {direction!r}.")
        for (ax, ay), (bx, by) in zip(body, list(body)[1:]):
            if abs(ax - bx) + abs(ay - by) != 1:
                raise ValueError(f"Body segments {(ax, ay)} and {(bx, by)} are not adjacent.")

        self.body = deque(body)
        self.direction = direction
        self.pending_direction = direction
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @classmethod
    def spawn(cls, head: Tuple[int, int], direction: Tuple[int, int], length: int = START_LEN) -> "Snake":
        """Lay `length` segments backward from `head` along `direction`."""
        x, y = head
        dx, dy = direction
        return cls([(x - i * dx, y - i * dy) for i in range(length)], direction)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.body[0]

    def next_head(self) -> Tuple[int, int]:
        x, y = self.head
        dx, dy = self.direction
        return (x + dx, y + dy)

    def occupies(self, position: Tuple[int, int]) -> bool:
        return position in self.body

    def move(self, new_head: Tuple[int, int], grow: bool = False) -> None:
        """Advance one cell. Growing keeps the tail in place."""
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()

    def kill(self, reason: str, tick: int) -> None:
        self.alive = False
        self.death_reason = reason
        self.death_tick = tick

    def __len__(self) -> int:
        return len(self.body)

    def __repr__(self):
        return (
            f"<Snake head={self.head}, length={len(self.body)}, "
            f"direction={self.direction}, alive={self.alive}>"
        )
