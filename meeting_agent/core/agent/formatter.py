# meeting_agent/core/agent/formatter.py
"""Speech-friendly rendering of meetings."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Sequence

from meeting_agent.core.meetings.schemas import Meeting, get_timezone, parse_datetime

log = logging.getLogger(__name__)

NO_MEETINGS_TEXT = "You have no upcoming meetings."


def format_datetime(value: str | dt.datetime, tz_name: str | None = None) -> str:
    """Render an instant as e.g. ``January 5, 9:00 AM IST`` in the given (or default) zone."""
    local = parse_datetime(value).astimezone(get_timezone(tz_name))
    hour = local.hour % 12 or 12
    return f"{local:%B} {local.day}, {hour}:{local:%M} {local:%p} {local:%Z}"


def format_meeting(meeting: Meeting) -> str:
    try:
        when = format_datetime(meeting.datetime)
    except (ValueError, TypeError, OverflowError):
        log.warning("Could not format datetime %r of meeting %s", meeting.datetime, meeting.id)
        when = meeting.datetime
    return f"⤷ {meeting.title} – {when} ({meeting.duration_minutes} mins)"


def format_meetings(meetings: Sequence[Meeting]) -> str:
    if not meetings:
        return NO_MEETINGS_TEXT
    noun = "meeting" if len(meetings) == 1 else "meetings"
    lines = "\n".join(format_meeting(m) for m in meetings)
    return f"You have {len(meetings)} upcoming {noun}:\n{lines}"


__all__ = ["NO_MEETINGS_TEXT", "format_datetime", "format_meeting", "format_meetings"]
