# meeting_agent/core/meetings/sql.py

"""SQLAlchemy-backed meeting store."""

from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from meeting_agent.db.base import async_session_context

from .base import BaseMeetingStore
from .exceptions import MeetingNotFoundError, MeetingStoreError
from .models import MeetingRecord
from .schemas import Meeting, MeetingCreate, MeetingUpdate, parse_datetime

log = logging.getLogger(__name__)


def _utc(value: str) -> dt.datetime:
    return parse_datetime(value).astimezone(dt.timezone.utc)


class SqlMeetingStore(BaseMeetingStore):
    """
    Meeting store over the ``meetings`` table.
    Each call runs in its own session/transaction.
    """

    name: str = "sql"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        log.info("Initialized SqlMeetingStore")

    async def list_meetings(self) -> List[Meeting]:
        try:
            async with async_session_context(self.session_factory) as session:
                result = await session.execute(
                    select(MeetingRecord).order_by(MeetingRecord.starts_at.asc())
                )
                records = result.scalars().all()
                meetings = [Meeting.model_validate(r) for r in records]
        except SQLAlchemyError as exc:
            raise MeetingStoreError(f"Failed to list meetings: {type(exc).__name__}") from exc
        log.debug("SQL: Listed %d meetings", len(meetings))
        return meetings

    async def create_meeting(self, data: MeetingCreate) -> Meeting:
        now = dt.datetime.now(dt.timezone.utc)
        record = MeetingRecord(
            id=str(uuid.uuid4()),
            starts_at=_utc(data.datetime),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        try:
            async with async_session_context(self.session_factory) as session:
                session.add(record)
                await session.flush()
                meeting = Meeting.model_validate(record)
        except SQLAlchemyError as exc:
            raise MeetingStoreError(f"Failed to create meeting: {type(exc).__name__}") from exc
        log.info("SQL: Meeting '%s' created with id %s", meeting.title, meeting.id)
        return meeting

    async def update_meeting(self, meeting_id: str, changes: MeetingUpdate) -> Meeting:
        values = changes.changes()
        try:
            async with async_session_context(self.session_factory) as session:
                record = await session.get(MeetingRecord, meeting_id)
                if record is None:
                    raise MeetingNotFoundError(meeting_id)
                for field, value in values.items():
                    setattr(record, field, value)
                if "datetime" in values:
                    record.starts_at = _utc(values["datetime"])
                record.updated_at = dt.datetime.now(dt.timezone.utc)
                await session.flush()
                meeting = Meeting.model_validate(record)
        except SQLAlchemyError as exc:
            raise MeetingStoreError(f"Failed to update meeting: {type(exc).__name__}") from exc
        log.info("SQL: Meeting id %s updated (%s)", meeting_id, ", ".join(values))
        return meeting

    async def delete_meeting(self, meeting_id: str) -> None:
        try:
            async with async_session_context(self.session_factory) as session:
                record = await session.get(MeetingRecord, meeting_id)
                if record is None:
                    raise MeetingNotFoundError(meeting_id)
                await session.delete(record)
        except SQLAlchemyError as exc:
            raise MeetingStoreError(f"Failed to delete meeting: {type(exc).__name__}") from exc
        log.info("SQL: Meeting id %s deleted", meeting_id)


__all__ = ["SqlMeetingStore"]
