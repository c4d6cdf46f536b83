# meeting_agent/core/llm/providers/gemini.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, cast

import google.generativeai as genai
from google.generativeai.types import (
    ContentDict,
    GenerateContentResponse,
    GenerationConfig,
    PartDict,
    SafetySettingDict,
)

from meeting_agent.config import settings
from .base import BaseLLMProvider, Message, build_system_prompt

log = logging.getLogger(__name__)


class GeminiLLMProvider(BaseLLMProvider):
    name = "gemini"

    DEFAULT_SAFETY_SETTINGS: List[SafetySettingDict] = [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    ]

    def __init__(self, model_name: Optional[str] = None) -> None:
        self.model_name = model_name or settings.GEMINI_MODEL
        self.safety_settings = self.DEFAULT_SAFETY_SETTINGS
        self.generation_config = GenerationConfig(
            temperature=settings.LLM_TEMPERATURE,
            candidate_count=1,
        )
        log.info("Attempting to initialize GeminiLLMProvider with model: %s", self.model_name)

        if not settings.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY is required for the gemini provider")
        genai.configure(api_key=settings.GEMINI_API_KEY)
        try:
            self.model = genai.GenerativeModel(
                model_name=self.model_name,
                system_instruction=build_system_prompt(),
                safety_settings=self.safety_settings,
            )
        except Exception as e:
            log.exception("Failed to initialize GenerativeModel '%s'", self.model_name)
            raise RuntimeError(f"Could not initialize Gemini model {self.model_name}") from e
        log.info("GeminiLLMProvider initialized model %s with system prompt.", self.model_name)

    def _prepare_gemini_history(self, context: Sequence[Message]) -> List[ContentDict]:
        gemini_history: List[ContentDict] = []
        for msg in context:
            content_text = msg.get("content", "").strip()
            if not content_text:
                continue
            role = "model" if msg.get("role") == "assistant" else "user"
            gemini_history.append(
                cast(ContentDict, {"role": role, "parts": [PartDict(text=content_text)]})
            )
        return gemini_history

    async def generate(self, prompt: str, context: Sequence[Message]) -> str:
        log.debug("Gemini generate: prompt='%.70s...', context items=%d", prompt, len(context))
        contents = self._prepare_gemini_history(context)
        contents.append(cast(ContentDict, {"role": "user", "parts": [PartDict(text=prompt)]}))

        response: GenerateContentResponse = await self.model.generate_content_async(
            contents=contents,
            generation_config=self.generation_config,
            safety_settings=self.safety_settings,
        )

        if response.prompt_feedback and response.prompt_feedback.block_reason:
            reason = response.prompt_feedback.block_reason.name
            log.warning("Gemini generate: prompt blocked by safety settings: %s", reason)
            return "Sorry, I can't help with that request."
        if not response.candidates:
            log.warning("Gemini generate: response missing candidates.")
            return "Sorry, I didn't catch that. Could you say it again?"

        candidate = response.candidates[0]
        if not candidate.content or not candidate.content.parts or not candidate.content.parts[0].text:
            finish_reason = candidate.finish_reason.name if candidate.finish_reason else "UNKNOWN"
            log.warning("Gemini generate: candidate has no text. Finish reason: %s", finish_reason)
            return "Sorry, I didn't catch that. Could you say it again?"

        response_text = candidate.content.parts[0].text.strip()
        log.info("Gemini generate: response extracted (%d chars).", len(response_text))
        return response_text


__all__ = ["GeminiLLMProvider"]
