"""
GameState entity - a read-only snapshot of a round at a point in time.
"""

from typing import Dict, Optional, Tuple, Any

from .constants import PLAYERS, direction_name

# Board markers per player: (head, body)
_MARKERS = {
    "p1": ("1", "a"),
    "p2": ("2", "b"),
}


class GameState:
    """
    A snapshot of the round handed to renderers.

    Every collection is an immutable copy, so holding a GameState gives no
    way to mutate the engine.

    Attributes:
        grid_size: the board is grid_size x grid_size cells
        bodies: dict of player -> tuple of (x, y), head first
        directions: dict of player -> committed (dx, dy)
        alive: dict of player -> bool
        death_reasons: dict of player -> reason or None
        food: (x, y) of the food
        scores: dict of player -> cumulative session score
        food_collected: food eaten by both players this round
        running, paused: lifecycle flags
        round_number: rounds started this session (1-based)
        tick_number: ticks played in the current round
        last_outcome: 'p1', 'p2', 'draw' or None while the round is undecided
    """

    def __init__(
        self,
        grid_size: int,
        bodies: Dict[str, Tuple[Tuple[int, int], ...]],
        directions: Dict[str, Tuple[int, int]],
        alive: Dict[str, bool],
        death_reasons: Dict[str, Optional[str]],
        food: Tuple[int, int],
        scores: Dict[str, int],
        food_collected: int,
        running: bool,
        paused: bool,
        round_number: int,
        tick_number: int,
        last_outcome: Optional[str] = None,
    ):
        self.grid_size = grid_size
        self.bodies = bodies
        self.directions = directions
        self.alive = alive
        self.death_reasons = death_reasons
        self.food = food
        self.scores = scores
        self.food_collected = food_collected
        self.running = running
        self.paused = paused
        self.round_number = round_number
        self.tick_number = tick_number
        self.last_outcome = last_outcome

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        1, 2 = head of player 1 / player 2 (x when that snake is dead)
        a, b = body of player 1 / player 2
        Row 0 is printed first, matching screen coordinates.
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        fx, fy = self.food
        board[fy][fx] = 'F'

        for player in PLAYERS:
            head_marker, body_marker = _MARKERS[player]
            if not self.alive[player]:
                head_marker = 'x'
            # Tail first so the head wins on any shared cell
            for idx, (x, y) in reversed(list(enumerate(self.bodies[player]))):
                board[y][x] = head_marker if idx == 0 else body_marker

        result = []
        for y in range(self.grid_size):
            result.append(f"{y:2d} {' '.join(board[y])}")
        result.append("   " + " ".join(str(i % 10) for i in range(self.grid_size)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form of the snapshot (tuples become lists)."""
        return {
            "grid_size": self.grid_size,
            "snakes": {
                player: {
                    "body": [list(p) for p in self.bodies[player]],
                    "direction": direction_name(self.directions[player]),
                    "alive": self.alive[player],
                    "death_reason": self.death_reasons[player],
                }
                for player in PLAYERS
            },
            "food": list(self.food),
            "scores": dict(self.scores),
            "food_collected": self.food_collected,
            "running": self.running,
            "paused": self.paused,
            "round_number": self.round_number,
            "tick_number": self.tick_number,
            "last_outcome": self.last_outcome,
        }

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, tick={self.tick_number}, "
            f"food={self.food}, scores={self.scores}>"
        )
