# src/lossofcharge/config/experiment.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from ..constants import SAMPLE_INTERVAL_S
from ..simulation.integrator import EULER
from ..simulation.state import ExperimentParameters

# These frozen dataclasses are the contract between the YAML loader and the
# code that runs an experiment. Every physical value is already converted to
# a float in SI units.


class ProtocolAction(Enum):
    """Steps a scripted (headless) run may perform, mirroring the bench controls."""
    TOGGLE_SWITCH = "toggle_switch"
    START_RECORDING = "start_recording"
    STOP_RECORDING = "stop_recording"
    TOGGLE_RECORDING = "toggle_recording"
    CLEAR_DATA = "clear_data"
    RESET = "reset"
    RUN = "run"


@dataclass(frozen=True)
class ProtocolStep:
    """One scripted action. `duration` (seconds) is only set for RUN steps."""
    action: ProtocolAction
    duration: Optional[float] = None


@dataclass(frozen=True)
class ProtocolConfig:
    """A scripted session: a fixed tick length and the steps to execute in order."""
    time_step: float
    steps: Tuple[ProtocolStep, ...]


@dataclass(frozen=True)
class ExperimentConfig:
    """A fully validated experiment definition."""
    name: str
    parameters: ExperimentParameters
    sampling_interval: float = SAMPLE_INTERVAL_S
    method: str = EULER
    max_tick_dt: Optional[float] = None
    protocol: Optional[ProtocolConfig] = None
    source_path: Optional[Path] = None
