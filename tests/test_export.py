# tests/test_export.py
import math

import numpy as np
import pytest

from lossofcharge import DataPoint, format_csv, log_series, write_csv
from lossofcharge.analysis import CSV_HEADER, ExportError, log_table


@pytest.fixture
def series():
    return (
        DataPoint(time=0.5, voltage=10.0),
        DataPoint(time=1.0, voltage=1.0),
        DataPoint(time=1.5, voltage=0.01),   # at the floor: excluded
        DataPoint(time=2.0, voltage=0.004),  # below the floor: excluded
        DataPoint(time=2.5, voltage=0.0),
    )


def test_log_series_applies_floor(series):
    points = log_series(series)
    assert [p.time for p in points] == [0.5, 1.0]
    for point in points:
        assert point.ln_voltage == pytest.approx(math.log(point.voltage))

def test_log_series_custom_floor(series):
    assert len(log_series(series, floor=2.0)) == 1

def test_log_table_shape(series):
    table = log_table(series)
    assert table.shape == (2, 3)
    np.testing.assert_allclose(table[:, 2], np.log(table[:, 1]))
    assert log_table(()).shape == (0, 3)

def test_format_csv(series):
    assert format_csv(series) == (
        "Time (s),Voltage (V),ln(V)\n"
        "0.5000,10.0000,2.3026\n"
        "1.0000,1.0000,0.0000\n"
    )

def test_format_csv_all_below_floor_has_header_only():
    assert format_csv([DataPoint(0.5, 0.001)]) == CSV_HEADER + "\n"

def test_write_csv(series, tmp_path):
    target = write_csv(series, tmp_path / "experiment_data.csv")
    assert target == (tmp_path / "experiment_data.csv").resolve()
    lines = target.read_text().splitlines()
    assert lines[0] == CSV_HEADER
    assert len(lines) == 3
    time_s, voltage, ln_v = (float(x) for x in lines[1].split(","))
    assert (time_s, voltage) == (0.5, 10.0)
    assert ln_v == pytest.approx(math.log(10.0), abs=5e-5)

def test_write_csv_refuses_empty_series(tmp_path):
    with pytest.raises(ExportError, match="no recorded data"):
        write_csv((), tmp_path / "out.csv")
    assert not (tmp_path / "out.csv").exists()

def test_write_csv_reports_unwritable_target(series, tmp_path):
    with pytest.raises(ExportError) as exc_info:
        write_csv(series, tmp_path / "missing_dir" / "out.csv")
    assert "Data Export Error" in exc_info.value.get_diagnostic_report()
