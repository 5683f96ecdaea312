# tests/conftest.py
import pytest

from lossofcharge import ExperimentParameters, ExperimentSession, SimulationState, SwitchPosition


# The classroom bench: 5 MOhm, 10 uF, 10 V source, RC = 50 s.
@pytest.fixture
def classroom_parameters():
    return ExperimentParameters(resistance=5e6, capacitance=10e-6, initial_voltage=10.0)

@pytest.fixture
def session(classroom_parameters):
    return ExperimentSession(classroom_parameters)

@pytest.fixture
def charged_state(classroom_parameters):
    """Fully charged capacitor, switch already thrown to discharge."""
    return SimulationState.initial(classroom_parameters).evolve(
        voltage=10.0, switch_position=SwitchPosition.DISCHARGE
    )


def make_state(voltage=10.0, time=0.0, position=SwitchPosition.OPEN, resistance=5e6, capacitance=10e-6, initial_voltage=10.0):
    """Builds a state directly, bypassing the session."""
    return SimulationState(
        voltage=voltage,
        time=time,
        switch_position=position,
        capacitance=capacitance,
        resistance=resistance,
        initial_voltage=initial_voltage,
    )
