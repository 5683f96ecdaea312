# tests/test_integrator.py
import math

import pytest

from lossofcharge.simulation import EULER, EXACT, InvalidTimeStepError, SwitchPosition, advance
from conftest import make_state


# --- Per-position semantics ---

@pytest.mark.parametrize("dt", [0.0, 0.016, 0.1, 1.0, 49.0, 50.0, 500.0])
@pytest.mark.parametrize("method", [EULER, EXACT])
def test_discharge_is_monotonic_and_non_negative(dt, method):
    state = make_state(voltage=7.5, position=SwitchPosition.DISCHARGE)
    new_state = advance(state, dt, method)
    assert 0.0 <= new_state.voltage <= state.voltage

def test_discharge_euler_step_value():
    state = make_state(voltage=10.0, position=SwitchPosition.DISCHARGE)
    new_state = advance(state, 0.1)
    assert new_state.voltage == pytest.approx(10.0 - 10.0 * 0.1 / 50.0)

def test_discharge_exact_step_value():
    state = make_state(voltage=10.0, position=SwitchPosition.DISCHARGE)
    new_state = advance(state, 5.0, EXACT)
    assert new_state.voltage == pytest.approx(10.0 * math.exp(-0.1))

def test_euler_overshoot_clamps_at_zero():
    # dt > RC would drive the Euler step negative.
    state = make_state(voltage=10.0, position=SwitchPosition.DISCHARGE)
    assert advance(state, 120.0, EULER).voltage == 0.0

@pytest.mark.parametrize("prior_voltage", [0.0, 3.3, 10.0])
@pytest.mark.parametrize("dt", [0.0, 0.016, 10.0])
def test_charge_pins_to_source_voltage(prior_voltage, dt):
    state = make_state(voltage=prior_voltage, position=SwitchPosition.CHARGE)
    assert advance(state, dt).voltage == 10.0

@pytest.mark.parametrize("dt", [0.0, 0.5, 1000.0])
def test_open_holds_voltage(dt):
    state = make_state(voltage=6.1, position=SwitchPosition.OPEN)
    assert advance(state, dt).voltage == 6.1

def test_zero_dt_is_noop_in_discharge():
    state = make_state(voltage=6.1, time=3.0, position=SwitchPosition.DISCHARGE)
    new_state = advance(state, 0.0)
    assert new_state.voltage == 6.1
    assert new_state.time == 3.0


# --- Time bookkeeping ---

def test_time_is_sum_of_deltas_regardless_of_position():
    deltas = [0.016, 0.017, 0.5, 0.0, 2.0, 0.033]
    positions = [SwitchPosition.OPEN, SwitchPosition.CHARGE, SwitchPosition.DISCHARGE] * 2
    state = make_state(voltage=0.0, time=1.25)
    for dt, position in zip(deltas, positions):
        state = advance(state.evolve(switch_position=position), dt)
    assert state.time == pytest.approx(1.25 + sum(deltas))

def test_advance_does_not_mutate_input():
    state = make_state(voltage=10.0, time=0.0, position=SwitchPosition.DISCHARGE)
    advance(state, 1.0)
    assert state.voltage == 10.0
    assert state.time == 0.0


# --- Precondition violations ---

@pytest.mark.parametrize("dt", [-0.001, float("nan"), float("inf")])
def test_invalid_dt_rejected(dt):
    state = make_state(time=2.0)
    with pytest.raises(InvalidTimeStepError) as exc_info:
        advance(state, dt)
    assert "Invalid Time Step" in exc_info.value.get_diagnostic_report()

def test_unknown_method_rejected():
    with pytest.raises(ValueError, match="Unknown integration method"):
        advance(make_state(), 0.1, "rk4")


# --- Classroom scenario: R=5 MOhm, C=10 uF, RC=50 s ---

def test_one_time_constant_of_euler_discharge(charged_state):
    state = charged_state
    for _ in range(500):
        state = advance(state, 0.1)
    assert state.time == pytest.approx(50.0)
    # Explicit Euler at dt = RC/500 lands within ~0.1% of 10/e.
    assert state.voltage == pytest.approx(10.0 * math.exp(-1), abs=0.01)
    assert state.voltage == pytest.approx(10.0 * (1 - 0.1 / 50.0) ** 500, rel=1e-9)

def test_one_time_constant_of_exact_discharge(charged_state):
    state = charged_state
    for _ in range(500):
        state = advance(state, 0.1, EXACT)
    assert state.voltage == pytest.approx(10.0 * math.exp(-1), rel=1e-9)

def test_charge_from_empty_is_instant(classroom_parameters):
    state = make_state(voltage=0.0, position=SwitchPosition.CHARGE)
    assert advance(state, 0.001).voltage == classroom_parameters.initial_voltage
