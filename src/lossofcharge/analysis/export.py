# src/lossofcharge/analysis/export.py
"""
Turns a recorded series into the tables students analyse.

The ln(V) column is only meaningful well above zero, so points at or below
`LN_VOLTAGE_FLOOR_V` are dropped from the log series and from the exported
table alike.
"""
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np

from ..constants import EXPORT_DECIMALS, EXPORT_FILENAME, LN_VOLTAGE_FLOOR_V
from ..simulation.state import DataPoint
from .exceptions import ExportError

logger = logging.getLogger(__name__)

CSV_HEADER = "Time (s),Voltage (V),ln(V)"


@dataclass(frozen=True)
class LogPoint:
    """A recorded point together with its natural-log voltage."""
    time: float
    voltage: float
    ln_voltage: float


def log_series(series: Sequence[DataPoint], floor: float = LN_VOLTAGE_FLOOR_V) -> List[LogPoint]:
    """Points with voltage strictly above `floor`, in recorded order, with ln(V) attached."""
    return [
        LogPoint(time=point.time, voltage=point.voltage, ln_voltage=float(np.log(point.voltage)))
        for point in series
        if point.voltage > floor
    ]


def log_table(series: Sequence[DataPoint], floor: float = LN_VOLTAGE_FLOOR_V) -> np.ndarray:
    """The log series as an (N, 3) array of [time, voltage, ln(voltage)] rows."""
    rows = [(p.time, p.voltage, p.ln_voltage) for p in log_series(series, floor)]
    return np.array(rows, dtype=float).reshape(-1, 3)


def format_csv(series: Sequence[DataPoint], decimals: int = EXPORT_DECIMALS) -> str:
    """Renders the export table: a header line plus one row per point above the floor."""
    buffer = io.StringIO()
    np.savetxt(
        buffer,
        log_table(series),
        fmt=f"%.{decimals}f",
        delimiter=",",
        header=CSV_HEADER,
        comments="",
        newline="\n",
    )
    return buffer.getvalue()


def write_csv(series: Sequence[DataPoint], path: Union[str, Path] = EXPORT_FILENAME) -> Path:
    """
    Writes the export table to `path` and returns the resolved path.

    Raises:
        ExportError: if nothing has been recorded yet, or the file cannot be written.
    """
    target = Path(path)
    if not series:
        raise ExportError("There is no recorded data to export.", target)
    content = format_csv(series)
    row_count = content.count("\n") - 1
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write the data file: {e}", target) from e
    logger.info(f"Exported {row_count} row(s) to {target.resolve()}")
    return target.resolve()
