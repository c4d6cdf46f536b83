# meeting_agent/core/meetings/models.py

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from meeting_agent.db.base import Base


class MeetingRecord(Base):
    """
    ORM model for meetings.

    ``datetime`` keeps the timezone-qualified ISO text exactly as accepted;
    ``starts_at`` is the same instant in UTC and is only used for ordering.
    """
    __tablename__ = "meetings"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    datetime: Mapped[str] = mapped_column(String(64), nullable=False)
    starts_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    participants: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    category: Mapped[str] = mapped_column(String(32), nullable=False, default="other")
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reminder_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_pattern: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_meetings_title", "title"),
        {"extend_existing": True},
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<MeetingRecord id={self.id!r} title={self.title!r} datetime={self.datetime!r}>"
