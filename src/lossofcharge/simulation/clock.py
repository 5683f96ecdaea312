# src/lossofcharge/simulation/clock.py
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TickClock:
    """
    Turns a wall-clock source into per-tick deltas for the presentation layer.

    The clock does not schedule anything. The driver (an animation callback, a
    timer, a test) calls `tick()` once per frame and passes the result to
    `ExperimentSession.tick`.

    Usage:
        clock = TickClock(max_dt=0.25)
        while running:
            session.tick(clock.tick())

    Args:
        time_source: Returns the current time in seconds. Defaults to
                     `time.monotonic` so deltas never go negative.
        max_dt: Optional cap on a single delta. Without a cap a long pause
                (e.g. a suspended window) is integrated as one large step and
                shows up as a jump in the recorded data.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic, max_dt: Optional[float] = None):
        if max_dt is not None and max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {max_dt}")
        self._time_source = time_source
        self._max_dt = max_dt
        self._last = time_source()

    @property
    def max_dt(self) -> Optional[float]:
        return self._max_dt

    def restart(self) -> None:
        """Rebases the clock so the next delta is measured from now."""
        self._last = self._time_source()

    def tick(self) -> float:
        """Seconds since the previous tick, clamped to [0, max_dt]."""
        now = self._time_source()
        dt = max(0.0, now - self._last)
        self._last = now
        if self._max_dt is not None and dt > self._max_dt:
            logger.debug(f"Capping tick delta of {dt:.3f}s to {self._max_dt:.3f}s")
            dt = self._max_dt
        return dt
