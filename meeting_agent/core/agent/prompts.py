# meeting_agent/core/agent/prompts.py
"""Prompt templates for the extraction calls, one per intent."""

from __future__ import annotations

import datetime as dt
import json
from typing import Optional, Sequence

from meeting_agent.config import settings
from meeting_agent.core.llm.message import Message
from meeting_agent.core.meetings.schemas import Meeting, get_timezone


def render_history(history: Sequence[Message]) -> str:
    return "\n".join(f"{msg['role']}: {msg['content']}" for msg in history)


def render_meetings_json(meetings: Sequence[Meeting]) -> str:
    return json.dumps([m.model_dump(mode="json") for m in meetings], indent=2, ensure_ascii=False)


def _now_line(now: Optional[dt.datetime] = None) -> str:
    now = (now or dt.datetime.now(dt.timezone.utc)).astimezone(get_timezone())
    return f"Current date and time: {now.isoformat(timespec='minutes')} ({settings.DEFAULT_TIMEZONE})"


def schedule_prompt(utterance: str, history: Sequence[Message], now: Optional[dt.datetime] = None) -> str:
    return f"""Based on the conversation history and current input, extract meeting details.
If information is missing, ask for it one piece at a time.
{_now_line(now)}

Conversation history:
{render_history(history)}

Current input: {utterance}

Respond with JSON if all details are present:
{{
  "action": "create",
  "title": "...",
  "datetime": "ISO 8601 with {settings.DEFAULT_TIMEZONE} offset, e.g. 2025-01-31T15:00:00+05:30",
  "duration_minutes": number,
  "notes": "..."
}}

Or respond naturally asking for missing information."""


def reschedule_prompt(
    utterance: str,
    history: Sequence[Message],
    meetings: Sequence[Meeting],
    now: Optional[dt.datetime] = None,
) -> str:
    return f"""User wants to reschedule a meeting. Current meetings:
{render_meetings_json(meetings)}
{_now_line(now)}

Conversation history:
{render_history(history)}

User said: {utterance}

Identify which meeting and what the new datetime should be. Respond with JSON:
{{
  "action": "update",
  "meetingId": "id or title",
  "newDatetime": "ISO 8601 with {settings.DEFAULT_TIMEZONE} offset"
}}

Or ask for clarification if unclear."""


def delete_prompt(
    utterance: str,
    history: Sequence[Message],
    meetings: Sequence[Meeting],
) -> str:
    return f"""User wants to cancel a meeting. Current meetings:
{render_meetings_json(meetings)}

Conversation history:
{render_history(history)}

User said: {utterance}

Identify which meeting to cancel. Respond with JSON:
{{
  "action": "delete",
  "meetingId": "id or title"
}}

Or ask which meeting they mean if unclear."""


def search_prompt(utterance: str, history: Sequence[Message]) -> str:
    return f"""User wants to search their meetings.

Conversation history:
{render_history(history)}

User said: {utterance}

Extract the word or phrase to search meeting titles and notes for. Respond with JSON:
{{
  "action": "search",
  "query": "..."
}}

Or ask what they are looking for if unclear."""


def general_context(meetings: Sequence[Meeting]) -> str:
    """Meetings summary appended to free-form conversation turns."""
    if not meetings:
        return "\n\nNo meetings scheduled yet."
    return f"\n\nCurrent meetings:\n{render_meetings_json(meetings)}"


__all__ = [
    "render_history",
    "render_meetings_json",
    "schedule_prompt",
    "reschedule_prompt",
    "delete_prompt",
    "search_prompt",
    "general_context",
]
