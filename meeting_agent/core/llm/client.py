# meeting_agent/core/llm/client.py

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .message import Message
from .providers import get_llm_provider
from .providers.base import BaseLLMProvider

log = logging.getLogger(__name__)


class LLMClient:
    """
    Async client for the completion service.
    Delegates to the provider returned by get_llm_provider().
    """
    def __init__(self, provider: Optional[BaseLLMProvider] = None):
        self.provider: BaseLLMProvider = provider or get_llm_provider()
        log.info("LLMClient using provider: %s", self.provider.name)

    async def generate(self, prompt: str, context: Sequence[Message]) -> str:
        """
        Generate a reply to ``prompt`` given the dialogue history ``context``.

        Args:
            prompt (str): Text for the current turn.
            context (Sequence[Message]): Prior dialogue, oldest first.

        Returns:
            str: Free text; no structural guarantee.
        """
        log.debug("LLMClient: Calling provider.generate with %d context items...", len(context))
        response = await self.provider.generate(prompt, context)
        log.debug("LLMClient: Provider.generate returned %d chars.", len(response))
        return response


__all__ = ("LLMClient",)
