# src/lossofcharge/simulation/sampling.py
"""
The data logger's sampling gate.

The tick loop runs at whatever rate the display allows, but the logger must
record at a steady cadence: a fast loop must not flood the series and a slow
one must not starve it. The gate carries the simulation time of the next
sampling boundary (`next_sample_due`) and emits one point whenever a tick
reaches or passes it, then moves the boundary forward by whole intervals.

Boundaries sit on integer multiples of the interval (0.5 s, 1.0 s, ...), so
the cadence does not drift with the tick rate.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..constants import SAMPLE_INTERVAL_S
from .state import DataPoint, SimulationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordingState:
    """
    Logger state owned by the session, replaced wholesale on every change.

    Attributes:
        enabled: Whether ticks may emit samples.
        series: Recorded points in chronological (insertion) order.
        next_sample_due: Simulation time of the next boundary, or None while
                         recording is off.
    """
    enabled: bool = False
    series: Tuple[DataPoint, ...] = ()
    next_sample_due: Optional[float] = None

    def start(self, time: float, interval: float = SAMPLE_INTERVAL_S) -> RecordingState:
        """Resumes emission from the first boundary after `time`, the current simulation time."""
        if self.enabled:
            return self
        return replace(self, enabled=True, next_sample_due=first_boundary_after(time, interval))

    def stop(self) -> RecordingState:
        """Stops emission immediately; recorded points are kept."""
        return replace(self, enabled=False, next_sample_due=None)

    def clear(self) -> RecordingState:
        """Empties the series without touching the enabled flag."""
        return replace(self, series=())


def first_boundary_after(time: float, interval: float) -> float:
    """Smallest multiple of `interval` strictly greater than `time`."""
    return (math.floor(time / interval) + 1) * interval


def sample(recording: RecordingState, state: SimulationState, interval: float = SAMPLE_INTERVAL_S) -> RecordingState:
    """
    Decides whether the freshly integrated `state` is logged.

    Returns `recording` itself when nothing changes, otherwise a new
    `RecordingState`. A tick that jumps across several boundaries still emits a
    single point.
    """
    if not recording.enabled:
        return recording

    due = recording.next_sample_due
    if due is None:  # Enabled without a start time; schedule from this tick.
        return replace(recording, next_sample_due=first_boundary_after(state.time, interval))
    if state.time < due:
        return recording

    point = DataPoint(time=state.time, voltage=state.voltage)
    # Skip every boundary the tick has already passed.
    skipped = math.floor((state.time - due) / interval) + 1
    next_due = due + skipped * interval
    if next_due <= state.time:
        next_due += interval
    logger.debug(f"Sampled V={point.voltage:.4f} V at t={point.time:.3f} s; next sample due at {next_due:.3f} s")
    return replace(recording, series=recording.series + (point,), next_sample_due=next_due)
