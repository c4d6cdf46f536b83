# meeting_agent/core/agent/tools.py

"""Concrete meeting actions run by the agent; every reply is speech-ready text."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from meeting_agent.core.meetings.base import BaseMeetingStore
from meeting_agent.core.meetings.exceptions import MeetingNotFoundError, MeetingStoreError
from meeting_agent.core.meetings.schemas import Meeting, MeetingCreate, MeetingUpdate

from .conflicts import find_conflicts
from .formatter import format_meetings

log = logging.getLogger(__name__)

LIST_TRAILER = "\n\nAnything you'd like to reschedule?"


def resolve_meeting(reference: str, meetings: Sequence[Meeting]) -> Optional[Meeting]:
    """Find a meeting by exact id, else by case-insensitive title substring."""
    for meeting in meetings:
        if meeting.id == reference:
            return meeting
    needle = reference.strip().lower()
    if not needle:
        return None
    for meeting in meetings:
        if needle in meeting.title.lower():
            return meeting
    return None


def _quote_titles(meetings: Sequence[Meeting]) -> str:
    titles = [f'"{m.title}"' for m in meetings]
    if len(titles) == 1:
        return titles[0]
    return ", ".join(titles[:-1]) + " and " + titles[-1]


class MeetingTools:
    """
    Action dispatcher over a meeting store.

    Only create/update/delete write to the store. Store failures are logged
    here and re-raised as MeetingStoreError.
    """

    def __init__(self, store: BaseMeetingStore) -> None:
        self.store = store

    async def _current(self, meetings: Optional[Sequence[Meeting]]) -> List[Meeting]:
        if meetings is not None:
            return list(meetings)
        return await self._call("list", self.store.list_meetings())

    async def _call(self, operation: str, awaitable):
        try:
            return await awaitable
        except MeetingNotFoundError:
            raise
        except MeetingStoreError:
            log.exception("Meeting store failed during %s", operation)
            raise
        except Exception as e:
            log.exception("Meeting store failed during %s", operation)
            raise MeetingStoreError(f"{operation} failed: {type(e).__name__}") from e

    async def list_meetings(self) -> str:
        meetings = await self._current(None)
        return format_meetings(meetings) + LIST_TRAILER

    async def create_meeting(
        self, fields: Dict[str, Any], meetings: Optional[Sequence[Meeting]] = None
    ) -> str:
        data = MeetingCreate.model_validate(fields)
        existing = await self._current(meetings)

        # Check-then-write is not atomic; concurrent creates for one slot may both pass.
        conflicts = find_conflicts(data.datetime, data.duration_minutes, existing)
        if conflicts:
            log.info("Create '%s' withheld: conflicts with %s", data.title, [m.id for m in conflicts])
            return (
                f'Heads up: "{data.title}" would overlap with {_quote_titles(conflicts)}. '
                "I haven't scheduled it. Would you like to pick a different time?"
            )

        meeting = await self._call("create", self.store.create_meeting(data))
        log.info("Meeting created via agent: %s (%s)", meeting.title, meeting.id)
        return f'Meeting "{meeting.title}" has been scheduled successfully!'

    async def update_meeting(
        self, meeting_id: str, datetime: str, meetings: Optional[Sequence[Meeting]] = None
    ) -> str:
        target = resolve_meeting(meeting_id, await self._current(meetings))
        if target is None:
            log.info("Reschedule: no meeting matches %r", meeting_id)
            return f'I couldn\'t find a meeting matching "{meeting_id}". Which meeting would you like to reschedule?'

        try:
            updated = await self._call("update", self.store.update_meeting(target.id, MeetingUpdate(datetime=datetime)))
        except MeetingNotFoundError:
            log.warning("Reschedule: meeting %s vanished before update", target.id)
            return f'I couldn\'t find the meeting "{target.title}" anymore. Which meeting would you like to reschedule?'
        return f'Meeting "{updated.title}" has been rescheduled successfully!'

    async def delete_meeting(self, meeting_id: str, meetings: Optional[Sequence[Meeting]] = None) -> str:
        target = resolve_meeting(meeting_id, await self._current(meetings))
        if target is None:
            log.info("Delete: no meeting matches %r", meeting_id)
            return f'I couldn\'t find a meeting matching "{meeting_id}". Nothing was cancelled.'

        try:
            await self._call("delete", self.store.delete_meeting(target.id))
        except MeetingNotFoundError:
            log.warning("Delete: meeting %s vanished before delete", target.id)
            return f'I couldn\'t find a meeting matching "{meeting_id}". Nothing was cancelled.'
        return f'Meeting "{target.title}" has been cancelled.'

    async def search_meetings(self, query: str, meetings: Optional[Sequence[Meeting]] = None) -> str:
        needle = query.strip().lower()
        matches = [
            m for m in await self._current(meetings)
            if needle in m.title.lower() or needle in (m.notes or "").lower()
        ]
        log.debug("Search %r matched %d meetings", query, len(matches))
        if not matches:
            return f'No meetings found matching "{query}".'
        return format_meetings(matches)


__all__ = ["MeetingTools", "resolve_meeting", "LIST_TRAILER"]
