"""
One-shot deferred actions on top of a `schedule.Scheduler`.

The round engine uses these to renew a round a fixed delay after it ends.
A handle can be cancelled before it fires; a cancelled handle never runs its
callback, even if its job was already picked up by the scheduler.
"""

import logging
from typing import Callable

import schedule


logger = logging.getLogger(__name__)


class DeferredAction:
    """Runs `callback` once, `delay_seconds` after creation, unless cancelled."""

    def __init__(
        self,
        scheduler: schedule.Scheduler,
        delay_seconds: float,
        callback: Callable[[], None],
        name: str = "deferred",
    ) -> None:
        self.name = name
        self._scheduler = scheduler
        self._callback = callback
        self.fired = False
        self.cancelled = False
        self._job = scheduler.every(delay_seconds).seconds.do(self._fire)
        logger.debug("Scheduled %s in %.3fs", name, delay_seconds)

    @property
    def pending(self) -> bool:
        return not (self.fired or self.cancelled)

    def cancel(self) -> bool:
        """Invalidate the action. Returns True if it had not fired yet."""
        if not self.pending:
            return False
        self.cancelled = True
        self._scheduler.cancel_job(self._job)
        logger.debug("Cancelled %s", self.name)
        return True

    def _fire(self):
        if self.pending:
            self.fired = True
            logger.debug("Firing %s", self.name)
            self._callback()
        return schedule.CancelJob

    def __repr__(self):
        state = "fired" if self.fired else "cancelled" if self.cancelled else "pending"
        return f"<DeferredAction {self.name} {state}>"
