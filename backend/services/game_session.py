"""
Fixed-rate session runner around a RoundEngine.

The session owns the engine, the `schedule.Scheduler` that drives its ticks
and deferred renewals, and a lock. Every entry point (the scheduler loop, the
HTTP handlers) goes through the lock, so one tick always completes before any
other mutation of the round can start.
"""

import logging
import threading
import time
from typing import Optional, Tuple

import schedule

import config
from domain.game_state import GameState
from main import RoundEngine


logger = logging.getLogger(__name__)


class GameSession:
    """A live two-player session ticking at a fixed cadence."""

    def __init__(
        self,
        engine: Optional[RoundEngine] = None,
        tick_ms: int = config.TICK_MS,
        loop_sleep_seconds: float = config.SCHEDULER_LOOP_SLEEP_SECONDS,
    ) -> None:
        self.scheduler = engine.scheduler if engine is not None else schedule.Scheduler()
        self.engine = engine or RoundEngine(scheduler=self.scheduler)
        self.tick_ms = tick_ms
        self.loop_sleep_seconds = loop_sleep_seconds
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        # A late tick is skipped, never queued: schedule computes the next
        # run from the moment the job finishes.
        self.scheduler.every(tick_ms / 1000.0).seconds.do(self.engine.tick).tag("tick")

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run_pending(self) -> None:
        """Run every due job (ticks, round renewals) under the session lock."""
        with self._lock:
            self.scheduler.run_pending()

    def start_loop(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="snake-session", daemon=True)
        self._thread.start()
        logger.info(
            "Session loop started. Tick every %s ms, grid %sx%s.",
            self.tick_ms,
            self.engine.grid_size,
            self.engine.grid_size,
        )

    def stop_loop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Session loop stopped.")

    def _loop(self) -> None:
        while not self._stop.is_set():
            try:
                self.run_pending()
            except Exception:
                logger.exception("Session loop iteration failed")
                raise
            time.sleep(self.loop_sleep_seconds)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def set_intent(self, player: str, direction: Tuple[int, int]) -> None:
        with self._lock:
            self.engine.set_intent(player, direction)

    def start(self) -> bool:
        with self._lock:
            return self.engine.start()

    def toggle_pause(self) -> bool:
        with self._lock:
            return self.engine.toggle_pause()

    def restart(self) -> None:
        with self._lock:
            self.engine.restart()

    def snapshot(self) -> GameState:
        with self._lock:
            return self.engine.snapshot()
