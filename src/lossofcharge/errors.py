# src/lossofcharge/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class LossOfChargeError(Exception):
    """Base class for all user-facing errors raised by the simulator."""
    pass

class ExperimentConfigError(LossOfChargeError):
    """
    Raised when an experiment definition cannot be turned into a valid session,
    from YAML loading to physical parameter validation. The message is a
    pre-formatted diagnostic report.
    """
    pass

class ExperimentRunError(LossOfChargeError):
    """
    Raised when a headless protocol run fails after the configuration was
    accepted. The message is a pre-formatted diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can render itself as a user-facing diagnostic report."""
    def get_diagnostic_report(self) -> str:
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Concrete, catchable base for internal errors that know how to describe
    themselves. Subclasses must implement `get_diagnostic_report`.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the multi-line report shown to the student or instructor.

    Args:
        error_type: Short category of the problem (e.g., "Invalid Parameter").
        details: Description of what went wrong, may span several lines.
        suggestion: What to change to fix it.
        context: Optional keys: 'source_file', 'parameter', 'user_input',
                 'sim_time'.

    Returns:
        The report string, ready to print.
    """
    lines = [
        "\n",
        "================ Loss-of-Charge Simulator: Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if parameter := context.get('parameter'):
        lines.append(f"Parameter:      {parameter}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if (sim_time := context.get('sim_time')) is not None:
        lines.append(f"Sim Time:       {sim_time}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=============================================================================")
    return "\n".join(lines)
