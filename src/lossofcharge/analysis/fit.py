# src/lossofcharge/analysis/fit.py
"""
Derives the unknown resistance from a recorded discharge.

For V(t) = V0 * exp(-t / RC), ln(V) is a straight line in t with slope -1/RC.
A least-squares fit over the ln(V) series therefore gives RC, and with the
known capacitance, R = -1 / (slope * C).
"""
import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..constants import LN_VOLTAGE_FLOOR_V
from ..simulation.state import DataPoint
from .exceptions import DecayFitError
from .export import log_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecayFit:
    """
    Straight-line fit of ln(V) against t.

    Attributes:
        slope: d ln(V) / dt, in 1/s. Negative for a discharge.
        intercept: ln(V) at t = 0.
        time_constant: RC = -1 / slope, in seconds.
        resistance: RC / C, in ohms.
        initial_voltage: exp(intercept), the extrapolated V0.
        r_squared: Coefficient of determination of the fit.
        point_count: Number of points used.
    """
    slope: float
    intercept: float
    time_constant: float
    resistance: float
    initial_voltage: float
    r_squared: float
    point_count: int


def fit_decay(series: Sequence[DataPoint], capacitance: float, floor: float = LN_VOLTAGE_FLOOR_V) -> DecayFit:
    """
    Fits ln(V) vs t over the points above `floor` and derives R.

    Raises:
        DecayFitError: with fewer than two usable points at distinct times, or
                       if the voltage is not decaying.
        ValueError: if `capacitance` is not positive.
    """
    if capacitance <= 0:
        raise ValueError(f"Capacitance must be positive to derive a resistance, got {capacitance}")

    table = log_table(series, floor)
    count = table.shape[0]
    times, ln_voltages = table[:, 0], table[:, 2]
    if count < 2 or np.ptp(times) == 0:
        raise DecayFitError("At least two points recorded at different times are needed to fit a line.", count)

    slope, intercept = np.polyfit(times, ln_voltages, 1)
    if slope >= 0:
        raise DecayFitError(f"The fitted slope is {slope:.4g} 1/s; a discharge must have a negative slope.", count)

    predicted = slope * times + intercept
    residual = float(np.sum((ln_voltages - predicted) ** 2))
    total = float(np.sum((ln_voltages - ln_voltages.mean()) ** 2))
    r_squared = 1.0 - residual / total if total > 0 else 1.0

    time_constant = -1.0 / slope
    fit = DecayFit(
        slope=float(slope),
        intercept=float(intercept),
        time_constant=float(time_constant),
        resistance=float(time_constant / capacitance),
        initial_voltage=math.exp(intercept),
        r_squared=r_squared,
        point_count=count,
    )
    logger.info(f"Decay fit over {count} points: RC={fit.time_constant:.4g} s, R={fit.resistance:.4g} ohm (R^2={fit.r_squared:.5f})")
    return fit
