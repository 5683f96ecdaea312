# tests/test_fit.py
import math

import pytest

from lossofcharge import DataPoint, fit_decay
from lossofcharge.analysis import DecayFitError


def exponential_series(v0=10.0, time_constant=50.0, start=0.5, stop=30.0, step=0.5):
    count = int(round((stop - start) / step)) + 1
    return [
        DataPoint(time=start + i * step, voltage=v0 * math.exp(-(start + i * step) / time_constant))
        for i in range(count)
    ]


def test_recovers_resistance_from_exact_decay():
    fit = fit_decay(exponential_series(), capacitance=10e-6)
    assert fit.time_constant == pytest.approx(50.0, rel=1e-9)
    assert fit.resistance == pytest.approx(5e6, rel=1e-9)
    assert fit.slope == pytest.approx(-1 / 50.0, rel=1e-9)
    assert fit.initial_voltage == pytest.approx(10.0, rel=1e-9)
    assert fit.r_squared == pytest.approx(1.0)
    assert fit.point_count == 60

def test_points_below_floor_are_ignored():
    series = exponential_series(time_constant=1.0, stop=10.0)
    usable = [p for p in series if p.voltage > 0.01]
    fit = fit_decay(series, capacitance=1e-6)
    assert fit.point_count == len(usable)
    assert fit.resistance == pytest.approx(1e6, rel=1e-9)

def test_needs_two_points():
    with pytest.raises(DecayFitError) as exc_info:
        fit_decay([DataPoint(0.5, 9.9)], capacitance=10e-6)
    assert exc_info.value.point_count == 1
    assert "Decay Fit Error" in exc_info.value.get_diagnostic_report()

def test_needs_distinct_times():
    with pytest.raises(DecayFitError):
        fit_decay([DataPoint(1.0, 9.9), DataPoint(1.0, 9.8)], capacitance=10e-6)

def test_rejects_non_decaying_data():
    with pytest.raises(DecayFitError, match="negative slope"):
        fit_decay([DataPoint(0.5, 5.0), DataPoint(1.0, 6.0), DataPoint(1.5, 7.0)], capacitance=10e-6)

def test_rejects_non_positive_capacitance():
    with pytest.raises(ValueError):
        fit_decay(exponential_series(), capacitance=0.0)
