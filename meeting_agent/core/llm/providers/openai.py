# meeting_agent/core/llm/providers/openai.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from meeting_agent.config import settings
from .base import BaseLLMProvider, Message, build_system_prompt

log = logging.getLogger(__name__)


class OpenAILLMProvider(BaseLLMProvider):
    """Chat-completions provider for OpenAI or any OpenAI-compatible server (``OPENAI_BASE_URL``)."""
    name = "openai"

    def __init__(self, model_name: Optional[str] = None, client: Optional[AsyncOpenAI] = None) -> None:
        self.model_name = model_name or settings.OPENAI_MODEL
        self.temperature = settings.LLM_TEMPERATURE
        self.system_prompt_text = build_system_prompt()
        log.info("Attempting to initialize OpenAILLMProvider with model: %s", self.model_name)

        if client is None:
            if not settings.OPENAI_API_KEY:
                raise ValueError("OPENAI_API_KEY is required for the openai provider")
            client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL)
        self.client = client
        log.info("OpenAILLMProvider initialized model %s", self.model_name)

    def _prepare_chat_messages(self, prompt: str, context: Sequence[Message]) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = [{"role": "system", "content": self.system_prompt_text}]
        for msg in context:
            content_text = msg.get("content", "").strip()
            if not content_text:
                continue
            role = "assistant" if msg.get("role") == "assistant" else "user"
            messages.append({"role": role, "content": content_text})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def generate(self, prompt: str, context: Sequence[Message]) -> str:
        log.debug("OpenAI generate: prompt='%.70s...', context items=%d", prompt, len(context))
        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=self._prepare_chat_messages(prompt, context),
            temperature=self.temperature,
        )

        if not response.choices:
            log.warning("OpenAI generate: response missing choices.")
            return "Sorry, I didn't catch that. Could you say it again?"
        content = response.choices[0].message.content
        if not content or not content.strip():
            log.warning("OpenAI generate: empty content. Finish reason: %s", response.choices[0].finish_reason)
            return "Sorry, I didn't catch that. Could you say it again?"

        response_text = content.strip()
        log.info("OpenAI generate: response extracted (%d chars).", len(response_text))
        return response_text


__all__ = ["OpenAILLMProvider"]
