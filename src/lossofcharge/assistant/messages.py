# src/lossofcharge/assistant/messages.py
from dataclasses import dataclass
from enum import Enum


class MessageRole(Enum):
    """Author of a chat turn."""
    USER = "user"
    MODEL = "model"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ChatMessage:
    role: MessageRole
    text: str
