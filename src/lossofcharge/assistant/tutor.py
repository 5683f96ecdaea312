# src/lossofcharge/assistant/tutor.py
"""
The boundary between the simulator and the conversational tutor service.

The service itself is injected as a `ReplyBackend` callable, so this module
holds no network client. Whatever the backend does, a failure never reaches
the caller: an empty reply or any exception is turned into a fixed fallback
text that the chat panel can show as-is.
"""
import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from ..simulation.state import SimulationState
from .context import format_context
from .messages import ChatMessage, MessageRole

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """\
You are a friendly and knowledgeable physics laboratory instructor in a virtual classroom.
The student is performing the "Loss of Charge" method experiment to measure high resistance.

Experiment Context:
- A Capacitor (C) is charged to voltage V0.
- It discharges through a high resistance Resistor (R).
- The voltage V(t) decays exponentially: V(t) = V0 * exp(-t / (R*C)).
- The student needs to record Voltage vs Time, plot ln(V) vs t, and find the slope to calculate R.

Your Goal:
- Answer questions about the physics concepts.
- Help them with calculations if they are stuck, but don't give the answer immediately.
- If they ask about the simulation status, refer to the provided context.
- Keep responses concise (under 100 words) unless a detailed explanation is requested.
"""

GREETING = (
    "Hello! I'm your lab assistant. I can help you understand how to calculate resistance "
    "from the leakage rate. Charge the capacitor and let it discharge to start!"
)
EMPTY_REPLY_FALLBACK = "I'm having trouble connecting to the lab server right now."
ERROR_FALLBACK = "Error communicating with the AI tutor."


class ReplyBackend(Protocol):
    """Transport to the tutor service. Returns the reply text, or None/'' for no reply."""
    def __call__(self, history: Sequence[ChatMessage], context: str, system_instruction: str) -> Optional[str]:
        ...


class TutorAssistant:
    """
    Keeps the chat history and asks the backend for replies.

    Args:
        backend: The injected transport to the tutor service.
        system_instruction: Prompt describing the tutor's role.
        greeting: Opening message from the tutor; None starts with an empty history.
    """

    def __init__(self, backend: ReplyBackend, system_instruction: str = SYSTEM_INSTRUCTION, greeting: Optional[str] = GREETING):
        self._backend = backend
        self._system_instruction = system_instruction
        self._history: List[ChatMessage] = []
        if greeting:
            self._history.append(ChatMessage(MessageRole.MODEL, greeting))

    @property
    def history(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._history)

    def reply(self, history: Sequence[ChatMessage], state: SimulationState) -> str:
        """
        One round trip to the backend with a fresh snapshot of the bench.

        Never raises: failures are logged and mapped to the fallback texts.
        """
        context = format_context(state)
        try:
            text = self._backend(list(history), context, self._system_instruction)
        except Exception as e:
            logger.error(f"Tutor backend failed: {e}", exc_info=True)
            return ERROR_FALLBACK
        if not text:
            logger.warning("Tutor backend returned an empty reply.")
            return EMPTY_REPLY_FALLBACK
        return text

    def ask(self, text: str, state: SimulationState) -> Optional[str]:
        """
        Records the student's question, fetches the reply and records it too.

        Blank questions are ignored and return None.
        """
        if not text.strip():
            return None
        self._history.append(ChatMessage(MessageRole.USER, text))
        answer = self.reply(self._history, state)
        self._history.append(ChatMessage(MessageRole.MODEL, answer))
        return answer
