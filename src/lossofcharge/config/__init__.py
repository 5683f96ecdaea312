from .experiment import ExperimentConfig, ProtocolAction, ProtocolConfig, ProtocolStep
from .exceptions import ConfigParsingError, SchemaValidationError
from .parser import ExperimentConfigParser
from .loader import load_experiment

__all__ = [
    # Data Structures
    "ExperimentConfig",
    "ProtocolAction",
    "ProtocolConfig",
    "ProtocolStep",
    # Parser and Exceptions
    "ExperimentConfigParser",
    "ConfigParsingError",
    "SchemaValidationError",
    # Facade
    "load_experiment",
]
