from __future__ import annotations

from enum import Enum


class SignalOutcome(str, Enum):
    """Result of a CTC/CTG presence signal."""

    INSERTED = "inserted"
    UPDATED = "updated"


class ChatModel(str, Enum):
    """AI providers selectable from the chat endpoint."""

    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
