# meeting_agent/core/meetings/memory.py

from __future__ import annotations

import asyncio
import datetime as dt
import logging
import uuid
from typing import List

from .base import BaseMeetingStore
from .exceptions import MeetingNotFoundError
from .schemas import Meeting, MeetingCreate, MeetingUpdate

log = logging.getLogger(__name__)


class InMemoryMeetingStore(BaseMeetingStore):
    """
    In-memory meeting store, used when no database is configured.
    Mutations are serialized behind a single lock.
    """

    name: str = "memory"

    def __init__(self) -> None:
        self._meetings: list[Meeting] = []
        self._lock = asyncio.Lock()
        log.info("Initialized InMemoryMeetingStore")

    async def list_meetings(self) -> List[Meeting]:
        log.debug("Memory: Listing %d meetings", len(self._meetings))
        return [m.model_copy(deep=True) for m in self._meetings]

    async def create_meeting(self, data: MeetingCreate) -> Meeting:
        now = dt.datetime.now(dt.timezone.utc)
        meeting = Meeting(
            id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        async with self._lock:
            self._meetings.append(meeting)
        log.info("Memory: Meeting '%s' added with id %s", meeting.title, meeting.id)
        return meeting.model_copy(deep=True)

    async def update_meeting(self, meeting_id: str, changes: MeetingUpdate) -> Meeting:
        async with self._lock:
            index = self._find_index(meeting_id)
            updated = self._meetings[index].model_copy(
                update={**changes.changes(), "updated_at": dt.datetime.now(dt.timezone.utc)}
            )
            self._meetings[index] = updated
        log.info("Memory: Meeting id %s updated (%s)", meeting_id, ", ".join(changes.changes()))
        return updated.model_copy(deep=True)

    async def delete_meeting(self, meeting_id: str) -> None:
        async with self._lock:
            index = self._find_index(meeting_id)
            removed = self._meetings.pop(index)
        log.info("Memory: Meeting id %s ('%s') deleted", meeting_id, removed.title)

    def _find_index(self, meeting_id: str) -> int:
        for index, meeting in enumerate(self._meetings):
            if meeting.id == meeting_id:
                return index
        log.warning("Memory: Meeting id %s not found", meeting_id)
        raise MeetingNotFoundError(meeting_id)


__all__ = ["InMemoryMeetingStore"]
