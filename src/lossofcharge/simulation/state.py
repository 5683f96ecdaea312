# src/lossofcharge/simulation/state.py
"""
Immutable value types shared by the integrator, the switch and the data logger.

Every change to the simulation produces a new object; nothing here is mutated
in place. A reader holding a `SimulationState` therefore always sees a
consistent snapshot, even if the tick loop has since moved on.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

from ..constants import (
    DEFAULT_CAPACITANCE_FARAD,
    DEFAULT_INITIAL_VOLTAGE_V,
    DEFAULT_RESISTANCE_OHM,
)
from .exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


class SwitchPosition(Enum):
    """Position of the three-way key connecting the capacitor."""
    OPEN = "open"            # Capacitor isolated, holds its charge.
    CHARGE = "charge"        # Capacitor across the source.
    DISCHARGE = "discharge"  # Capacitor across the resistor under test.

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ExperimentParameters:
    """
    The fixed physical setup of one experiment session.

    Validated on construction, so a session can never be started with a
    non-positive resistance or capacitance.
    """
    resistance: float = DEFAULT_RESISTANCE_OHM
    capacitance: float = DEFAULT_CAPACITANCE_FARAD
    initial_voltage: float = DEFAULT_INITIAL_VOLTAGE_V

    def __post_init__(self):
        for name in ("resistance", "capacitance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(name, value, f"The {name} must be a finite value greater than zero.")
        if not math.isfinite(self.initial_voltage) or self.initial_voltage < 0:
            raise InvalidParameterError(
                "initial_voltage", self.initial_voltage,
                "The source voltage must be a finite value of zero or more."
            )

    @property
    def time_constant(self) -> float:
        """RC, the characteristic decay time in seconds."""
        return self.resistance * self.capacitance


@dataclass(frozen=True)
class SimulationState:
    """
    Snapshot of the bench at one instant of simulated time.

    Attributes:
        voltage: Capacitor terminal voltage, always in [0, initial_voltage].
        time: Elapsed simulation time in seconds.
        switch_position: Current position of the key.
        capacitance: Farads, constant for the session.
        resistance: Ohms, constant for the session.
        initial_voltage: Source voltage used when charging.
    """
    voltage: float
    time: float
    switch_position: SwitchPosition
    capacitance: float
    resistance: float
    initial_voltage: float

    @classmethod
    def initial(cls, parameters: ExperimentParameters) -> SimulationState:
        """The state every session starts from and every reset returns to."""
        return cls(
            voltage=0.0,
            time=0.0,
            switch_position=SwitchPosition.OPEN,
            capacitance=parameters.capacitance,
            resistance=parameters.resistance,
            initial_voltage=parameters.initial_voltage,
        )

    @property
    def time_constant(self) -> float:
        return self.resistance * self.capacitance

    def evolve(self, **changes) -> SimulationState:
        """Returns a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class DataPoint:
    """One logged sample of the capacitor voltage."""
    time: float
    voltage: float
