# src/lossofcharge/simulation/switch.py
import logging

from .state import SimulationState, SwitchPosition

logger = logging.getLogger(__name__)

# Fixed cycle of the key. Every toggle advances exactly one step.
_NEXT_POSITION = {
    SwitchPosition.OPEN: SwitchPosition.CHARGE,
    SwitchPosition.CHARGE: SwitchPosition.DISCHARGE,
    SwitchPosition.DISCHARGE: SwitchPosition.OPEN,
}


def next_position(position: SwitchPosition) -> SwitchPosition:
    """open -> charge -> discharge -> open."""
    return _NEXT_POSITION[position]


def toggle_switch(state: SimulationState) -> SimulationState:
    """
    Moves the key one step along its cycle.

    Only the position changes; the integrator reacts to the new position on
    the next tick.
    """
    new_position = next_position(state.switch_position)
    logger.debug(f"Switch toggled {state.switch_position} -> {new_position} at t={state.time:.3f}s")
    return state.evolve(switch_position=new_position)
