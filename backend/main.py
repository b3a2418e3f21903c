import argparse
import json
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import schedule

import config
from domain.constants import (
    LEFT, RIGHT, DIRECTIONS,
    P1, P2, PLAYERS, DRAW,
    DEATH_HEAD_ON, DEATH_WALL, DEATH_SELF, DEATH_OTHER,
    WIN_BONUS, is_opposite,
)
from domain.food import place_food
from domain.game_state import GameState
from domain.snake import Snake
from services.deferred import DeferredAction

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# Smallest board on which the two starting snakes do not overlap
MIN_GRID_SIZE = 10

# (p1 died, p2 died) -> round outcome; None means the round continues.
OUTCOME_TABLE = {
    (False, False): None,
    (True, False): P2,
    (False, True): P1,
    (True, True): DRAW,
}


def other_player(player: str) -> str:
    return P2 if player == P1 else P1


@dataclass
class Hazards:
    """What a snake's next head would run into on the pre-move board."""
    hits_wall: bool = False
    hits_self: bool = False
    hits_other: bool = False

    @property
    def death_reason(self) -> Optional[str]:
        if self.hits_wall:
            return DEATH_WALL
        if self.hits_self:
            return DEATH_SELF
        if self.hits_other:
            return DEATH_OTHER
        return None


@dataclass
class TickResult:
    tick_number: int
    next_heads: Dict[str, Position]
    hazards: Dict[str, Hazards]
    head_on: bool
    outcome: Optional[str] = None
    eaters: List[str] = field(default_factory=list)


class RoundEngine:
    """
    Owns the state of a two-player session and advances it one tick at a time.

    Manages:
      - Board (grid_size x grid_size)
      - Both snakes and their pending intents
      - The single food cell
      - Cumulative scores and the per-round food counter
      - Round end and the deferred renewal of the next round

    All mutation goes through tick(), set_intent(), start(), toggle_pause()
    and restart(). Callers must not invoke them concurrently.
    """

    def __init__(
        self,
        grid_size: int = config.GRID_SIZE,
        round_end_delay_ms: int = config.ROUND_END_DELAY_MS,
        scheduler: Optional[schedule.Scheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        if grid_size < MIN_GRID_SIZE:
            raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}, got {grid_size}.")

        self.grid_size = grid_size
        self.round_end_delay_ms = round_end_delay_ms
        self.scheduler = scheduler or schedule.Scheduler()
        self.rng = rng or random.Random()

        self.scores: Dict[str, int] = {P1: 0, P2: 0}
        self.running = False
        self.paused = False
        self.round_number = 0
        self.snakes: Dict[str, Snake] = {}
        self.food: Position = (0, 0)
        self.food_collected = 0
        self.tick_number = 0
        self.last_outcome: Optional[str] = None
        self._renewal: Optional[DeferredAction] = None

        self.reset_round()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_round(self) -> None:
        """
        Install a fresh round: both snakes back at their starting cells,
        new food, food counter cleared. Scores are left alone.
        A renewal still pending from the previous round is cancelled.
        """
        if self._renewal is not None:
            self._renewal.cancel()
            self._renewal = None
        mid = self.grid_size // 2
        self.snakes = {
            P1: Snake.spawn((4, mid), RIGHT),
            P2: Snake.spawn((self.grid_size - 5, mid), LEFT),
        }
        self.food = place_food(self._occupied(), self.grid_size, self.rng)
        self.food_collected = 0
        self.tick_number = 0
        self.last_outcome = None
        self.round_number += 1
        logger.info(f"Round {self.round_number} ready. Food at {self.food}, scores: {self.scores}")

    def start(self) -> bool:
        """Start ticking. Ignored while running or while a finished round waits for renewal."""
        if self.running or self.awaiting_renewal:
            return False
        self.running = True
        self.paused = False
        logger.info(f"Round {self.round_number} started.")
        return True

    def toggle_pause(self) -> bool:
        """Flip the pause flag (only while running). Returns the new pause state."""
        if not self.running:
            return self.paused
        self.paused = not self.paused
        logger.info("Paused." if self.paused else "Resumed.")
        return self.paused

    def restart(self) -> None:
        """Zero the scores and install a fresh, stopped round."""
        self.scores = {P1: 0, P2: 0}
        self.running = False
        self.paused = False
        self.round_number = 0
        self.reset_round()
        logger.info("Session restarted.")

    @property
    def awaiting_renewal(self) -> bool:
        return self._renewal is not None and self._renewal.pending

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_intent(self, player: str, direction: Position) -> None:
        """Record the direction `player` wants to take on the next tick."""
        if player not in PLAYERS:
            raise ValueError(f"Unknown player {player!r}.")
        try:
            direction = tuple(direction)
        except TypeError:
            raise ValueError(f"Invalid direction {direction!r}.") from None
        if direction not in DIRECTIONS:
            raise ValueError(f"Invalid direction {direction!r}.")
        self.snakes[player].pending_direction = direction

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> Optional[TickResult]:
        """
        Advance the round by exactly one step:
          1) Commit each snake's intent unless it reverses the current direction
          2) Compute both next heads
          3) Classify hazards against the pre-move board
          4) Resolve the outcome (head-on beats individual hazards)
          5) Move survivors, growing onto food
          6) Score food (p1 then p2) and respawn it once
          7) End the round if it was decided

        Returns None when the round is not ticking (stopped, paused, or over).
        """
        if not self.running or self.paused or self.last_outcome is not None:
            return None

        self.tick_number += 1

        # 1) Direction commit
        for player in PLAYERS:
            self._commit_direction(player, self.snakes[player])

        # 2) Next heads
        next_heads = {player: self.snakes[player].next_head() for player in PLAYERS}

        # 3) Hazards, all against the bodies as they were before this tick
        hazards = {player: self._classify(player, next_heads[player]) for player in PLAYERS}
        head_on = next_heads[P1] == next_heads[P2]

        # 4) Outcome
        outcome = self._resolve(hazards, head_on)

        # 5) Movement
        food = self.food
        for player in PLAYERS:
            snake = self.snakes[player]
            if snake.alive:
                snake.move(next_heads[player], grow=next_heads[player] == food)

        # 6) Food, checked against the same pre-respawn cell for both players
        eaters = [p for p in PLAYERS if self.snakes[p].alive and self.snakes[p].head == food]
        for player in eaters:
            self.scores[player] += 1
            self.food_collected += 1
        if eaters:
            self.food = place_food(self._occupied(), self.grid_size, self.rng)
            logger.debug(f"Food eaten by {eaters} at {food}; respawned at {self.food}")

        # 7) Termination
        if outcome is not None:
            self._end_round(outcome)

        return TickResult(
            tick_number=self.tick_number,
            next_heads=next_heads,
            hazards=hazards,
            head_on=head_on,
            outcome=outcome,
            eaters=eaters,
        )

    def _commit_direction(self, player: str, snake: Snake) -> None:
        pending = snake.pending_direction
        if is_opposite(pending, snake.direction):
            logger.debug(f"Ignoring reversal by {player}")
            return
        snake.direction = pending

    def _inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def _classify(self, player: str, next_head: Position) -> Hazards:
        hits_wall = not self._inside(next_head)
        return Hazards(
            hits_wall=hits_wall,
            hits_self=False if hits_wall else self.snakes[player].occupies(next_head),
            hits_other=self.snakes[other_player(player)].occupies(next_head),
        )

    def _resolve(self, hazards: Dict[str, Hazards], head_on: bool) -> Optional[str]:
        if head_on:
            for player in PLAYERS:
                self.snakes[player].kill(DEATH_HEAD_ON, self.tick_number)
        else:
            for player in PLAYERS:
                reason = hazards[player].death_reason
                if reason is not None:
                    self.snakes[player].kill(reason, self.tick_number)

        return OUTCOME_TABLE[(not self.snakes[P1].alive, not self.snakes[P2].alive)]

    def _end_round(self, outcome: str) -> None:
        self.running = False
        self.last_outcome = outcome
        if outcome in PLAYERS:
            self.scores[outcome] += WIN_BONUS

        reasons = {p: self.snakes[p].death_reason for p in PLAYERS if not self.snakes[p].alive}
        if outcome == DRAW:
            logger.info(f"Round {self.round_number} is a draw after {self.tick_number} ticks. Deaths: {reasons}")
        else:
            logger.info(f"Round {self.round_number} won by {outcome} after {self.tick_number} ticks. Deaths: {reasons}")

        self._renewal = DeferredAction(
            self.scheduler,
            self.round_end_delay_ms / 1000.0,
            self._renew_round,
            name=f"round-{self.round_number}-renewal",
        )

    def _renew_round(self) -> None:
        self._renewal = None
        self.reset_round()
        self.running = True

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def _occupied(self) -> List[Position]:
        return [pos for snake in self.snakes.values() for pos in snake.body]

    def snapshot(self) -> GameState:
        """
        Return a read-only snapshot of the round for renderers.
        """
        return GameState(
            grid_size=self.grid_size,
            bodies={p: tuple(self.snakes[p].body) for p in PLAYERS},
            directions={p: self.snakes[p].direction for p in PLAYERS},
            alive={p: self.snakes[p].alive for p in PLAYERS},
            death_reasons={p: self.snakes[p].death_reason for p in PLAYERS},
            food=self.food,
            scores=self.scores.copy(),
            food_collected=self.food_collected,
            running=self.running,
            paused=self.paused,
            round_number=self.round_number,
            tick_number=self.tick_number,
            last_outcome=self.last_outcome,
        )


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(ticks: int, grid_size: int = config.GRID_SIZE, seed: Optional[int] = None,
                   show_board: bool = True) -> Dict:
    """
    Runs a headless session for a fixed number of ticks.

    Nobody steers, so both snakes keep their starting headings. Finished rounds
    are renewed immediately instead of waiting for the round-end delay.

    Returns:
        A dictionary summarizing the session (rounds, final_scores, outcomes).
    """
    engine = RoundEngine(grid_size=grid_size, rng=random.Random(seed))
    engine.start()
    outcomes = []

    for _ in range(ticks):
        result = engine.tick()
        if show_board:
            print("\n" + engine.snapshot().print_board() + "\n")
        if result is not None and result.outcome is not None:
            outcomes.append(result.outcome)
            engine.scheduler.run_all()

    return {
        "rounds": engine.round_number,
        "final_scores": engine.scores,
        "outcomes": outcomes,
    }


def serve(host: str = config.HOST, port: int = config.PORT) -> None:
    """Run a live session and expose it over the local HTTP control surface."""
    from app import create_app
    from services.game_session import GameSession

    session = GameSession()
    session.start_loop()
    try:
        create_app(session).run(host=host, port=port, threaded=True)
    finally:
        session.stop_loop()


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Two-player snake round engine."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run a live session behind the HTTP API")
    serve_parser.add_argument("--host", type=str, default=config.HOST,
                              help="Interface to bind (default from SNAKE_HOST)")
    serve_parser.add_argument("--port", type=int, default=config.PORT,
                              help="Port to bind (default from SNAKE_PORT)")

    sim_parser = subparsers.add_parser("simulate", help="Run a headless session and print the boards")
    sim_parser.add_argument("--ticks", type=int, default=20,
                            help="Number of ticks to simulate")
    sim_parser.add_argument("--grid", type=int, default=config.GRID_SIZE,
                            help="Grid size N for an N x N board")
    sim_parser.add_argument("--seed", type=int, default=None,
                            help="Seed for food placement")
    sim_parser.add_argument("--quiet", action="store_true",
                            help="Only print the summary")

    args = parser.parse_args()
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    if args.command == "serve":
        serve(host=args.host, port=args.port)
        return

    result = run_simulation(args.ticks, grid_size=args.grid, seed=args.seed, show_board=not args.quiet)
    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
