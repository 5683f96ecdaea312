# src/lossofcharge/config/parser.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import pint
import yaml

from ..constants import SAMPLE_INTERVAL_S
from ..simulation.integrator import DISCHARGE_METHODS, EULER
from ..simulation.state import ExperimentParameters
from ..units import ureg, to_si_magnitude
from .exceptions import ConfigParsingError, SchemaValidationError
from .experiment import ExperimentConfig, ProtocolAction, ProtocolConfig, ProtocolStep

logger = logging.getLogger(__name__)

# Anything pint (or the tokenizer underneath it) raises on a malformed literal.
_QUANTITY_PARSE_ERRORS = (pint.errors.PintError, ValueError, AttributeError, TypeError, SyntaxError)


class QuantityValidator(cerberus.Validator):
    """Cerberus validator that understands physical quantity literals."""

    def _validate_unit(self, unit: str, field: str, value: Any):
        """
        Checks that the value is a number (SI) or a quantity string compatible with `unit`.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return # Let the 'type' rule report this.
        try:
            to_si_magnitude(value, unit)
        except pint.DimensionalityError:
            self._error(field, f"'{value}' has dimension {ureg.Quantity(value).dimensionality}, which is not compatible with '{unit}'.")
        except _QUANTITY_PARSE_ERRORS as e:
            self._error(field, f"'{value}' is not a valid quantity: {e}")

    def _validate_strictly_positive(self, constraint: bool, field: str, value: Any):
        """
        Requires the SI magnitude of a quantity to be greater than zero.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return
        try:
            magnitude = ureg.Quantity(value).magnitude if isinstance(value, str) else value
        except _QUANTITY_PARSE_ERRORS:
            return # Reported by the 'unit' rule.
        if magnitude <= 0:
            self._error(field, f"'{value}' must be greater than zero.")


class ExperimentConfigParser:
    """
    Loads and validates an experiment definition YAML file.
    Produces an immutable `ExperimentConfig`; it never starts a session itself.
    """
    _number_or_string = ["string", "number"]

    _schema = {
        "experiment_name": {"type": "string", "required": False, "empty": False},
        "parameters": {
            "type": "dict", "required": False, "default": {}, "schema": {
                "resistance": {"type": _number_or_string, "unit": "ohm"},
                "capacitance": {"type": _number_or_string, "unit": "farad"},
                "initial_voltage": {"type": _number_or_string, "unit": "volt"},
            },
        },
        "sampling": {
            "type": "dict", "required": False, "schema": {
                "interval": {"type": _number_or_string, "unit": "second", "strictly_positive": True},
            },
        },
        "integration": {
            "type": "dict", "required": False, "schema": {
                "method": {"type": "string", "allowed": sorted(DISCHARGE_METHODS)},
                "max_tick_dt": {"type": _number_or_string, "nullable": True, "unit": "second", "strictly_positive": True},
            },
        },
        "protocol": {
            "type": "dict", "required": False, "schema": {
                "time_step": {"type": _number_or_string, "required": True, "unit": "second", "strictly_positive": True},
                "steps": {
                    "type": "list", "required": True, "minlength": 1, "schema": {
                        "type": "dict", "schema": {
                            "action": {"type": "string", "required": True, "allowed": [a.value for a in ProtocolAction]},
                            "duration": {"type": _number_or_string, "unit": "second", "strictly_positive": True},
                        },
                    },
                },
            },
        },
    }

    def __init__(self):
        self._validator = QuantityValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("ExperimentConfigParser initialized.")

    def parse(self, yaml_path: Union[str, Path]) -> ExperimentConfig:
        """Loads, validates and converts the YAML file at `yaml_path`."""
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Loading experiment definition from: {resolved_path}")
        content = self._load_yaml(resolved_path)
        return self.parse_dict(content, source_path=resolved_path)

    def parse_dict(self, content: Dict[str, Any], source_path: Optional[Path] = None) -> ExperimentConfig:
        """Validates and converts an already-loaded experiment mapping."""
        if not isinstance(content, dict):
            raise ConfigParsingError("The root of an experiment definition must be a mapping.", source_path)
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source_path)
        document = self._validator.document

        raw_params = document.get("parameters", {})
        parameters = ExperimentParameters(**{
            key: to_si_magnitude(value, unit)
            for key, unit in (("resistance", "ohm"), ("capacitance", "farad"), ("initial_voltage", "volt"))
            if (value := raw_params.get(key)) is not None
        })

        sampling = document.get("sampling", {})
        integration = document.get("integration", {})
        max_tick_dt = integration.get("max_tick_dt")

        name = document.get("experiment_name") or (source_path.stem if source_path else "experiment")
        config = ExperimentConfig(
            name=name,
            parameters=parameters,
            sampling_interval=to_si_magnitude(sampling.get("interval", SAMPLE_INTERVAL_S), "second"),
            method=integration.get("method", EULER),
            max_tick_dt=to_si_magnitude(max_tick_dt, "second") if max_tick_dt is not None else None,
            protocol=self._build_protocol(document.get("protocol"), source_path),
            source_path=source_path,
        )
        logger.info(
            f"Experiment '{config.name}' loaded: RC={parameters.time_constant:.4g} s, "
            f"{len(config.protocol.steps) if config.protocol else 0} protocol step(s)."
        )
        return config

    def _build_protocol(self, raw_protocol: Optional[Dict[str, Any]], source_path: Optional[Path]) -> Optional[ProtocolConfig]:
        if raw_protocol is None:
            return None
        steps = []
        for index, raw_step in enumerate(raw_protocol["steps"]):
            action = ProtocolAction(raw_step["action"])
            duration = raw_step.get("duration")
            if action is ProtocolAction.RUN and duration is None:
                raise ConfigParsingError(f"Protocol step {index} ('run') requires a 'duration'.", source_path)
            if action is not ProtocolAction.RUN and duration is not None:
                raise ConfigParsingError(f"Protocol step {index} ('{action.value}') does not take a 'duration'.", source_path)
            steps.append(ProtocolStep(action, to_si_magnitude(duration, "second") if duration is not None else None))
        return ProtocolConfig(time_step=to_si_magnitude(raw_protocol["time_step"], "second"), steps=tuple(steps))

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads a YAML file and checks that it holds a mapping."""
        if not source.is_file():
            raise ConfigParsingError(f"Experiment file not found at path: {source}", source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except PermissionError as e:
            raise ConfigParsingError(f"Permission denied when trying to read file: {e}", source) from e
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Invalid YAML syntax: {e}", source) from e
        if content is None:
            raise ConfigParsingError("The YAML file is empty or contains no valid content.", source)
        if not isinstance(content, dict):
            raise ConfigParsingError("The root of the YAML file must be a dictionary (mapping).", source)
        return content
