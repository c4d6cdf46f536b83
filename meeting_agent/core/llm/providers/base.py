# meeting_agent/core/llm/providers/base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from meeting_agent.config import settings
from meeting_agent.core.llm.message import Message

SYSTEM_PROMPT_TEMPLATE = """You are a helpful voice-only meeting scheduling assistant. Your name is {assistant_name}.

Your capabilities:
1. Schedule new meetings by collecting: title, date & time ({timezone} timezone), duration, and optional notes
2. List upcoming meetings in a natural, readable format
3. Reschedule existing meetings by identifying them and updating the datetime
4. Cancel meetings and search meetings by title or notes

Important rules:
- Always speak naturally and conversationally
- Ask ONE question at a time when collecting meeting details
- When confirming a meeting, summarize all details in one sentence
- When listing meetings, format them clearly with bullet points (⤷)
- Always use the {timezone} timezone unless the user specifies otherwise
- Be concise but friendly
- If the user says "yes" or confirms, proceed with the action
- If the user says "no" or corrects something, ask for the correction

Always respond in a natural, conversational voice that sounds good when spoken aloud."""


def build_system_prompt() -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        assistant_name=settings.ASSISTANT_NAME,
        timezone=settings.DEFAULT_TIMEZONE,
    )


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers (ASYNC)."""
    name: str  # provider name (e.g. 'stub', 'gemini', 'openai')

    @abstractmethod
    async def generate(self, prompt: str, context: Sequence[Message]) -> str:
        """
        Generate a plain-text reply to ``prompt`` given the prior ``context``.

        Errors from the backing API propagate to the caller.
        """
        ...


__all__ = ["BaseLLMProvider", "Message", "build_system_prompt"]
