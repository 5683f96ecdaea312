# src/lossofcharge/simulation/session.py
"""
Defines the `ExperimentSession`, the single owner of the bench state.

The session glues the three pure pieces of the core together: the switch
state machine, the discharge integrator and the sampling gate. It holds one
immutable `SessionSnapshot` and replaces it in a single assignment on every
change, so a renderer or assistant reading between ticks never observes a
state from one tick paired with a recording from another.

The session never schedules itself. The presentation layer owns the loop and
calls `tick(dt)` once per frame.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import SAMPLE_INTERVAL_S
from .exceptions import InvalidParameterError
from .integrator import DISCHARGE_METHODS, EULER, advance
from .sampling import RecordingState, sample
from .state import DataPoint, ExperimentParameters, SimulationState
from .switch import toggle_switch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """A consistent pair of bench state and logger state."""
    state: SimulationState
    recording: RecordingState


class ExperimentSession:
    """
    One run of the loss-of-charge experiment.

    Args:
        parameters: The bench setup. Defaults to the classroom values
                    (5 MOhm, 10 uF, 10 V).
        sampling_interval: Logger cadence in simulated seconds.
        method: Discharge stepper passed to the integrator, "euler" or "exact".

    Raises:
        InvalidParameterError: if the sampling interval is not positive.
        ValueError: if `method` is unknown.
    """

    def __init__(
        self,
        parameters: Optional[ExperimentParameters] = None,
        sampling_interval: float = SAMPLE_INTERVAL_S,
        method: str = EULER,
    ):
        if not math.isfinite(sampling_interval) or sampling_interval <= 0:
            raise InvalidParameterError(
                "sampling_interval", sampling_interval,
                "The sampling interval must be a finite number of seconds greater than zero."
            )
        if method not in DISCHARGE_METHODS:
            raise ValueError(f"Unknown integration method '{method}'. Must be one of {sorted(DISCHARGE_METHODS)}.")

        self._parameters = parameters if parameters is not None else ExperimentParameters()
        self._sampling_interval = sampling_interval
        self._method = method
        self._snapshot = SessionSnapshot(SimulationState.initial(self._parameters), RecordingState())
        logger.info(
            f"Experiment session started: R={self._parameters.resistance:.4g} ohm, "
            f"C={self._parameters.capacitance:.4g} F, V0={self._parameters.initial_voltage:.4g} V, "
            f"RC={self._parameters.time_constant:.4g} s, method={method}"
        )

    # --- Read-only views ---

    @property
    def parameters(self) -> ExperimentParameters:
        return self._parameters

    @property
    def sampling_interval(self) -> float:
        return self._sampling_interval

    @property
    def method(self) -> str:
        return self._method

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def state(self) -> SimulationState:
        return self._snapshot.state

    @property
    def recording(self) -> RecordingState:
        return self._snapshot.recording

    @property
    def is_recording(self) -> bool:
        return self._snapshot.recording.enabled

    @property
    def data(self) -> Tuple[DataPoint, ...]:
        return self._snapshot.recording.series

    # --- Tick loop ---

    def tick(self, dt: float) -> SessionSnapshot:
        """Integrates one frame, lets the logger decide, and publishes both at once."""
        current = self._snapshot
        new_state = advance(current.state, dt, self._method)
        new_recording = sample(current.recording, new_state, self._sampling_interval)
        self._snapshot = SessionSnapshot(new_state, new_recording)
        return self._snapshot

    # --- User intents ---

    def toggle_switch(self) -> SimulationState:
        current = self._snapshot
        self._snapshot = SessionSnapshot(toggle_switch(current.state), current.recording)
        logger.info(f"Switch moved to '{self._snapshot.state.switch_position}' at t={current.state.time:.2f}s")
        return self._snapshot.state

    def start_recording(self) -> None:
        current = self._snapshot
        self._snapshot = SessionSnapshot(current.state, current.recording.start(current.state.time, self._sampling_interval))
        logger.info(f"Recording started at t={current.state.time:.2f}s")

    def stop_recording(self) -> None:
        current = self._snapshot
        self._snapshot = SessionSnapshot(current.state, current.recording.stop())
        logger.info(f"Recording stopped at t={current.state.time:.2f}s with {len(current.recording.series)} point(s)")

    def toggle_recording(self) -> bool:
        """Flips the recording flag and returns the new value."""
        if self.is_recording:
            self.stop_recording()
        else:
            self.start_recording()
        return self.is_recording

    def clear_data(self) -> None:
        current = self._snapshot
        self._snapshot = SessionSnapshot(current.state, current.recording.clear())
        logger.info(f"Cleared {len(current.recording.series)} recorded point(s)")

    def reset(self) -> None:
        """Back to the initial bench: discharged, t=0, switch open, logger off and empty."""
        self._snapshot = SessionSnapshot(SimulationState.initial(self._parameters), RecordingState())
        logger.info("Experiment session reset.")
