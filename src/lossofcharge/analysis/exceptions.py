# src/lossofcharge/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for exporting and analysing recorded data.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class ExportError(DiagnosableError):
    """Raised when the recorded series cannot be written out."""
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Data Export Error",
            details=self.details,
            suggestion="Record some data first (start recording while the capacitor discharges), and check the target directory is writable.",
            context={'source_file': self.file_path}
        )


@dataclass()
class DecayFitError(DiagnosableError, ValueError):
    """Raised when ln(V) vs t cannot yield a resistance."""
    details: str
    point_count: int = 0

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Decay Fit Error",
            details=f"{self.details}\nUsable points (V above the ln floor): {self.point_count}",
            suggestion="Record at least two points while the switch is in the discharge position and before the voltage has fully decayed.",
            context={}
        )
