# meeting_agent/core/agent/extraction.py
"""
Slot filling: one LLM extraction call per turn.

The model either answers with a JSON object carrying every required field
(``Complete``) or with a natural-language follow-up question (``Incomplete``).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from meeting_agent.core.llm.client import LLMClient
from meeting_agent.core.llm.message import Message
from meeting_agent.core.meetings.schemas import Meeting, MeetingCreate, MeetingFields, normalize_datetime

from . import prompts
from .intents import Intent

log = logging.getLogger(__name__)

Action = Literal["create", "update", "delete", "search"]

RESTATE_TEXT = (
    "I couldn't quite work out those details. Could you repeat the meeting title, "
    "the date and time, and how long it should last?"
)
RESTATE_DATETIME_TEXT = "I couldn't understand the new date and time. When should the meeting be moved to?"

REQUIRED_FIELDS: Dict[Intent, Tuple[str, ...]] = {
    Intent.SCHEDULE: ("title", "datetime", "duration_minutes"),
    Intent.RESCHEDULE: ("meetingId", "newDatetime"),
    Intent.DELETE: ("meetingId",),
    Intent.SEARCH: ("query",),
}

ACTIONS: Dict[Intent, Action] = {
    Intent.SCHEDULE: "create",
    Intent.RESCHEDULE: "update",
    Intent.DELETE: "delete",
    Intent.SEARCH: "search",
}


class Complete(BaseModel):
    """All required fields are present and well-typed."""
    kind: Literal["complete"] = "complete"
    action: Action
    fields: Dict[str, Any] = Field(default_factory=dict)


class Incomplete(BaseModel):
    """The model asked a follow-up question instead of returning data."""
    kind: Literal["incomplete"] = "incomplete"
    follow_up: str


ExtractionResult = Union[Complete, Incomplete]


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index of the ``}`` closing the ``{`` at ``start``, or None if it never closes."""
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def balanced_spans(text: str) -> List[str]:
    """All balanced ``{...}`` spans in ``text``, largest first (string literals respected)."""
    spans = []
    for start, char in enumerate(text):
        if char != "{":
            continue
        end = _balanced_end(text, start)
        if end is not None:
            spans.append(text[start:end + 1])
    # stable sort keeps earlier spans first among equal lengths
    return sorted(spans, key=len, reverse=True)


def find_json_object(text: str) -> Optional[str]:
    """
    Return the largest balanced ``{...}`` span in ``text``.

    An opening brace that is never closed does not hide a later object.
    """
    spans = balanced_spans(text)
    return spans[0] if spans else None


def parse_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the largest span that decodes to a JSON object."""
    for span in balanced_spans(text):
        try:
            data = json.loads(span)
        except json.JSONDecodeError as e:
            log.debug("Extraction: JSON-looking span did not parse: %s", e)
            continue
        if isinstance(data, dict):
            return data
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


class SlotFiller:
    """Turns free text plus history into a structured action or a follow-up question."""

    def __init__(self, llm: LLMClient) -> None:
        self.llm = llm

    def build_prompt(
        self,
        intent: Intent,
        utterance: str,
        history: Sequence[Message],
        meetings: Sequence[Meeting],
    ) -> str:
        if intent is Intent.SCHEDULE:
            return prompts.schedule_prompt(utterance, history)
        if intent is Intent.RESCHEDULE:
            return prompts.reschedule_prompt(utterance, history, meetings)
        if intent is Intent.DELETE:
            return prompts.delete_prompt(utterance, history, meetings)
        if intent is Intent.SEARCH:
            return prompts.search_prompt(utterance, history)
        raise ValueError(f"No extraction for intent {intent.value!r}")

    async def extract(
        self,
        intent: Intent,
        utterance: str,
        history: Sequence[Message],
        meetings: Sequence[Meeting],
    ) -> ExtractionResult:
        prompt = self.build_prompt(intent, utterance, history, meetings)
        reply = await self.llm.generate(prompt, [])

        data = parse_json_object(reply)
        if data is None:
            log.info("Extraction[%s]: no JSON in reply, asking follow-up", intent.value)
            return Incomplete(follow_up=reply)

        missing = [key for key in REQUIRED_FIELDS[intent] if _is_blank(data.get(key))]
        if missing:
            log.info("Extraction[%s]: missing fields %s", intent.value, missing)
            return Incomplete(follow_up=reply)

        return self._validate(intent, data)

    def _validate(self, intent: Intent, data: Dict[str, Any]) -> ExtractionResult:
        action = ACTIONS[intent]

        if intent is Intent.SCHEDULE:
            optional = [name for name in MeetingFields.model_fields if data.get(name) is not None]
            raw = {key: data[key] for key in (*REQUIRED_FIELDS[intent], *optional)}
            try:
                meeting = MeetingCreate.model_validate(raw)
            except ValidationError as e:
                log.info("Extraction[schedule]: fields failed validation: %s", e.errors())
                return Incomplete(follow_up=RESTATE_TEXT)
            return Complete(action=action, fields=meeting.model_dump())

        if intent is Intent.RESCHEDULE:
            try:
                new_datetime = normalize_datetime(str(data["newDatetime"]))
            except ValueError:
                log.info("Extraction[reschedule]: bad newDatetime %r", data["newDatetime"])
                return Incomplete(follow_up=RESTATE_DATETIME_TEXT)
            return Complete(
                action=action,
                fields={"meetingId": str(data["meetingId"]).strip(), "newDatetime": new_datetime},
            )

        if intent is Intent.DELETE:
            return Complete(action=action, fields={"meetingId": str(data["meetingId"]).strip()})

        return Complete(action=action, fields={"query": str(data["query"]).strip()})


__all__ = [
    "Complete",
    "Incomplete",
    "ExtractionResult",
    "SlotFiller",
    "find_json_object",
    "parse_json_object",
    "REQUIRED_FIELDS",
]
