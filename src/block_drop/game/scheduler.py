from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol


logger = logging.getLogger(__name__)


class Tickable(Protocol):
    tick_speed: int

    def tick(self) -> None: ...


class DropScheduler(threading.Thread):
    """Drops the active piece one row every `game.tick_speed` milliseconds.

    The loop ticks first and sleeps second, so the first period is skipped
    to avoid an instant drop on start. Stopping is cooperative: a sleep in
    progress is never interrupted, the loop just exits at the next period
    boundary. A stopped scheduler cannot be restarted.
    """

    def __init__(self, game: Tickable, sleep: Optional[Callable[[float], None]] = None) -> None:
        super().__init__(name="drop-scheduler", daemon=True)
        self.game = game
        self._sleep = sleep or time.sleep
        self._running = True
        self._skip_next_tick = True

    @property
    def running(self) -> bool:
        return self._running

    def request_stop(self) -> None:
        self._running = False

    def request_skip_next_tick(self) -> None:
        self._skip_next_tick = True

    def run(self) -> None:
        logger.debug("drop scheduler started")
        while self._running:
            if self._skip_next_tick:
                self._skip_next_tick = False
            else:
                self.game.tick()
            # re-read every period so a level-up applies immediately
            self._sleep(self.game.tick_speed / 1000.0)
        logger.debug("drop scheduler stopped")
