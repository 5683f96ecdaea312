# src/lossofcharge/simulation/__init__.py
from .exceptions import InvalidParameterError, InvalidTimeStepError
from .state import DataPoint, ExperimentParameters, SimulationState, SwitchPosition
from .switch import next_position, toggle_switch
from .integrator import EULER, EXACT, advance
from .sampling import RecordingState, sample
from .clock import TickClock
from .session import ExperimentSession, SessionSnapshot
from .results import ProtocolResult
from .execution import run_protocol, start_session

__all__ = [
    # Exceptions
    "InvalidParameterError",
    "InvalidTimeStepError",
    # Data Structures
    "DataPoint",
    "ExperimentParameters",
    "SimulationState",
    "SwitchPosition",
    "RecordingState",
    "SessionSnapshot",
    "ProtocolResult",
    # Pure Transitions
    "next_position",
    "toggle_switch",
    "advance",
    "sample",
    "EULER",
    "EXACT",
    # Drivers
    "TickClock",
    "ExperimentSession",
    "run_protocol",
    "start_session",
]
