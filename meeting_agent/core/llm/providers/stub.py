# meeting_agent/core/llm/providers/stub.py

from __future__ import annotations

import logging
from typing import Sequence

from meeting_agent.core.llm.message import Message
from .base import BaseLLMProvider

log = logging.getLogger(__name__)


class StubLLMProvider(BaseLLMProvider):
    """Returns a fixed reply; no network calls. Handy in unit tests and local runs."""
    name = "stub"

    REPLY = "Sure! Could you tell me the title, date and time, and duration of the meeting?"

    async def generate(self, prompt: str, ctx: Sequence[Message]) -> str:
        log.debug("StubLLMProvider: generate called (%d context items)", len(ctx))
        return self.REPLY
