# src/lossofcharge/assistant/context.py
import logging
from typing import Sequence

from ..simulation.state import SimulationState
from .messages import ChatMessage, MessageRole

logger = logging.getLogger(__name__)


def format_context(state: SimulationState) -> str:
    """
    Describes the bench for the tutor.

    The true resistance is included so the tutor can check a student's
    result; it is labelled as hidden so the tutor does not simply reveal it.
    """
    return (
        "Current Sim State:\n"
        f"Voltage: {state.voltage:.2f} V\n"
        f"Switch Position: {state.switch_position}\n"
        f"Capacitance: {state.capacitance:g} Farads\n"
        f"True Resistance (Hidden from student): {state.resistance:g} Ohms"
    )


def build_prompt(history: Sequence[ChatMessage], context: str) -> str:
    """
    Single-turn prompt: the bench context followed by the latest user question.

    Not called by `TutorAssistant`, which hands history and context to its
    backend separately. Backends talking to a text-only completion endpoint
    use this to flatten them into one prompt.
    """
    latest = next((m.text for m in reversed(history) if m.role is MessageRole.USER), "")
    return f"Context: {context}\n\nUser: {latest}"
