# src/lossofcharge/config/exceptions.py
"""
Diagnosable exceptions for loading experiment definition files.

`ConfigParsingError` covers file-level problems (missing file, bad YAML,
wrong root type, inconsistent protocol steps). `SchemaValidationError` carries
every Cerberus violation found in a structurally wrong document. Both name
the file they came from so the report points the user at it.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ConfigParsingError(DiagnosableError):
    """Raised for unreadable files, invalid YAML, or logically inconsistent content."""
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return f"Error in experiment file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Experiment File Error",
            details=self.details,
            suggestion="Ensure the file exists, is readable, and contains a valid YAML mapping.",
            context={'source_file': self.file_path}
        )


@dataclass()
class SchemaValidationError(DiagnosableError):
    """Raised when the YAML loads but does not match the experiment schema."""
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self):
        return [f"  - Field '{field}': {messages[0]}" for field, messages in sorted(self.errors.items())]

    def __str__(self):
        return f"Schema validation failed for experiment file '{self.file_path}':\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The experiment file does not match the expected format.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Experiment Schema Validation Error",
            details=details,
            suggestion="Physical values are numbers in SI units or strings with units (e.g. '5 Mohm', '10 uF', '0.5 s'). Check for misspelled section names and unknown protocol actions.",
            context={'source_file': self.file_path}
        )
