# src/lossofcharge/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("Loss-of-charge simulator package initialized.")

from .units import ureg, pint, Quantity
# The simulation package must be imported before config: the config data
# structures are built on the simulation value types.
from .simulation import (
    DataPoint,
    ExperimentParameters,
    ExperimentSession,
    SimulationState,
    SwitchPosition,
    TickClock,
    advance,
    run_protocol,
    sample,
    start_session,
    toggle_switch,
)
from .config import ExperimentConfig, ExperimentConfigParser, load_experiment
from .analysis import DecayFit, fit_decay, format_csv, log_series, write_csv
from .assistant import ChatMessage, MessageRole, TutorAssistant, format_context
from .errors import LossOfChargeError, ExperimentConfigError, ExperimentRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Simulation Core
    "DataPoint", "ExperimentParameters", "SimulationState", "SwitchPosition",
    "advance", "sample", "toggle_switch",
    "ExperimentSession", "TickClock", "run_protocol", "start_session",
    # Configuration
    "ExperimentConfig", "ExperimentConfigParser", "load_experiment",
    # Analysis & Export
    "DecayFit", "fit_decay", "format_csv", "log_series", "write_csv",
    # Assistant Boundary
    "ChatMessage", "MessageRole", "TutorAssistant", "format_context",
    # Top-Level Errors
    "LossOfChargeError", "ExperimentConfigError", "ExperimentRunError",
]
