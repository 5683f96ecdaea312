# src/lossofcharge/analysis/__init__.py
from .exceptions import DecayFitError, ExportError
from .export import CSV_HEADER, LogPoint, format_csv, log_series, log_table, write_csv
from .fit import DecayFit, fit_decay

__all__ = [
    # Exceptions
    "DecayFitError",
    "ExportError",
    # Export
    "CSV_HEADER",
    "LogPoint",
    "format_csv",
    "log_series",
    "log_table",
    "write_csv",
    # Resistance Derivation
    "DecayFit",
    "fit_decay",
]
