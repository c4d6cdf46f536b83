# meeting_agent/core/meetings/base.py
"""
Abstract base for meeting stores.
All methods are asynchronous.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from .schemas import Meeting, MeetingCreate, MeetingUpdate


class BaseMeetingStore(ABC):
    """
    Abstract CRUD interface over meeting records (ASYNC).
    """

    # Store name (e.g. 'memory', 'sql')
    name: str

    @abstractmethod
    async def list_meetings(self) -> List[Meeting]:
        """
        Return every stored meeting.

        Returns:
            List[Meeting]: Meetings in store order.
        """
        ...

    @abstractmethod
    async def create_meeting(self, data: MeetingCreate) -> Meeting:
        """
        Persist a new meeting and return it with its id and timestamps.

        Raises:
            MeetingStoreError: When the backend fails.
        """
        ...

    @abstractmethod
    async def update_meeting(self, meeting_id: str, changes: MeetingUpdate) -> Meeting:
        """
        Apply the fields set on ``changes`` to an existing meeting.

        Raises:
            MeetingNotFoundError: If ``meeting_id`` is unknown.
        """
        ...

    @abstractmethod
    async def delete_meeting(self, meeting_id: str) -> None:
        """
        Remove a meeting.

        Raises:
            MeetingNotFoundError: If ``meeting_id`` is unknown.
        """
        ...


__all__ = ["BaseMeetingStore"]
