# meeting_agent/core/llm/message.py

from __future__ import annotations

from typing import Literal, TypedDict


class Message(TypedDict):
    """One conversation turn passed to the LLM."""
    role: Literal["user", "assistant"]
    content: str


__all__ = ["Message"]
