# src/lossofcharge/simulation/results.py
from dataclasses import dataclass
from typing import Tuple

from .state import DataPoint, SimulationState


@dataclass(frozen=True)
class ProtocolResult:
    """
    Outcome of a scripted, headless experiment run.

    Attributes:
        experiment_name: Name taken from the experiment definition.
        final_state: Bench state after the last protocol step.
        series: Every point the data logger recorded, in chronological order.
        tick_count: Number of integrator steps executed.
    """
    experiment_name: str
    final_state: SimulationState
    series: Tuple[DataPoint, ...]
    tick_count: int
