# src/lossofcharge/simulation/integrator.py
"""
The discharge integrator: a pure function from (state, dt) to the next state.

Physics per switch position:

* CHARGE: the capacitor is pinned to the source voltage. The charging time
  constant is not modelled; charging is instantaneous.
* DISCHARGE: exponential decay through the resistor, dV/dt = -V / RC.
* OPEN: ideal hold, no leakage.

Simulation time advances by `dt` in every position.

Two discharge steppers are available. "euler" is the explicit Euler step
used by the classroom bench, V - V*dt/RC, which under-estimates V(t) slightly
and degrades as dt approaches RC. "exact" applies the closed-form factor
exp(-dt/RC) per step. Both clamp at zero.

Large time steps are integrated as given. Capping a one-frame jump (e.g.
after the display was suspended) is the clock's job, see `TickClock`.
"""
import logging
import math
from typing import Callable, Dict

from .exceptions import InvalidTimeStepError
from .state import SimulationState, SwitchPosition

logger = logging.getLogger(__name__)

EULER = "euler"
EXACT = "exact"


def _euler_discharge(voltage: float, dt: float, time_constant: float) -> float:
    decay = voltage * dt / time_constant
    return max(0.0, voltage - decay)


def _exact_discharge(voltage: float, dt: float, time_constant: float) -> float:
    return max(0.0, voltage * math.exp(-dt / time_constant))


DISCHARGE_METHODS: Dict[str, Callable[[float, float, float], float]] = {
    EULER: _euler_discharge,
    EXACT: _exact_discharge,
}


def advance(state: SimulationState, dt: float, method: str = EULER) -> SimulationState:
    """
    Advances the bench by `dt` seconds.

    Args:
        state: The state at the end of the previous tick. R and C are assumed
               positive; `ExperimentParameters` enforces this at session start.
        dt: Seconds since the previous tick. Zero is allowed.
        method: Discharge stepper, "euler" or "exact".

    Returns:
        A new `SimulationState`; `state` itself is never modified.

    Raises:
        InvalidTimeStepError: if `dt` is negative or not finite.
        ValueError: if `method` is not a known stepper.
    """
    if not math.isfinite(dt) or dt < 0:
        raise InvalidTimeStepError(dt=dt, sim_time=state.time)
    try:
        discharge_step = DISCHARGE_METHODS[method]
    except KeyError:
        raise ValueError(f"Unknown integration method '{method}'. Must be one of {sorted(DISCHARGE_METHODS)}.") from None

    voltage = state.voltage
    if state.switch_position is SwitchPosition.CHARGE:
        voltage = state.initial_voltage
    elif state.switch_position is SwitchPosition.DISCHARGE:
        voltage = discharge_step(voltage, dt, state.time_constant)
    # SwitchPosition.OPEN: ideal capacitor, voltage held.

    return state.evolve(voltage=voltage, time=state.time + dt)
