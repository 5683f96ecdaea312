# src/lossofcharge/assistant/__init__.py
from .messages import ChatMessage, MessageRole
from .context import build_prompt, format_context
from .tutor import (
    EMPTY_REPLY_FALLBACK,
    ERROR_FALLBACK,
    GREETING,
    SYSTEM_INSTRUCTION,
    ReplyBackend,
    TutorAssistant,
)

__all__ = [
    "ChatMessage",
    "MessageRole",
    "build_prompt",
    "format_context",
    "EMPTY_REPLY_FALLBACK",
    "ERROR_FALLBACK",
    "GREETING",
    "SYSTEM_INSTRUCTION",
    "ReplyBackend",
    "TutorAssistant",
]
