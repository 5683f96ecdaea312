# src/lossofcharge/simulation/exceptions.py
"""
Diagnosable exceptions raised by the simulation core.

The core touches no files or network, so the only failures it reports are
precondition violations: physical parameters that cannot describe a real
bench, and time steps that would move the clock backwards.
"""
import math
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class InvalidParameterError(DiagnosableError, ValueError):
    """
    Raised when an experiment is started with a physically meaningless value,
    e.g. a non-positive resistance or capacitance.
    """
    parameter: str
    value: float
    details: str

    def __str__(self):
        return f"Invalid value {self.value!r} for parameter '{self.parameter}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Experiment Parameter",
            details=self.details,
            suggestion="Resistance and capacitance must be strictly positive and the source voltage must not be negative.",
            context={'parameter': self.parameter, 'user_input': self.value}
        )


@dataclass()
class InvalidTimeStepError(DiagnosableError, ValueError):
    """Raised when the integrator is asked to step by a negative or non-finite delta."""
    dt: float
    sim_time: Optional[float] = None

    def __str__(self):
        return f"Time step must be a finite, non-negative number of seconds, got {self.dt!r}"

    def get_diagnostic_report(self) -> str:
        reason = "is not finite" if not math.isfinite(self.dt) else "is negative"
        return format_diagnostic_report(
            error_type="Invalid Time Step",
            details=f"The requested time step of {self.dt!r} s {reason}. Simulation time can only move forward.",
            suggestion="Make sure the driver measures elapsed time with a monotonic clock, or use TickClock.",
            context={'sim_time': self.sim_time}
        )
