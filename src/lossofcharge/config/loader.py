# src/lossofcharge/config/loader.py
"""
Public entry point for turning an experiment file into a validated config.

Every known, diagnosable failure (file errors, schema violations, physically
invalid parameters) is re-raised as a single `ExperimentConfigError` whose
message is the full diagnostic report. The original exception is chained.
"""
import logging
from pathlib import Path
from typing import Union

from ..errors import DiagnosableError, ExperimentConfigError, format_diagnostic_report
from .experiment import ExperimentConfig
from .parser import ExperimentConfigParser

logger = logging.getLogger(__name__)


def load_experiment(path: Union[str, Path]) -> ExperimentConfig:
    """
    Loads the experiment definition at `path`.

    Raises:
        ExperimentConfigError: if the file cannot be turned into a valid
                               experiment for any reason.
    """
    try:
        return ExperimentConfigParser().parse(path)
    except DiagnosableError as e:
        logger.error(f"Experiment definition rejected: {e}")
        raise ExperimentConfigError(e.get_diagnostic_report()) from e
    except Exception as e:
        logger.critical(f"Unexpected error while loading experiment definition: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Configuration Error Occurred ({type(e).__name__})",
            details=f"The experiment loader encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'source_file': path}
        )
        raise ExperimentConfigError(report) from e
