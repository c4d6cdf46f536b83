# meeting_agent/core/meetings/schemas.py
"""
Pydantic schemas for meetings.

Used in:
    * meeting_agent/core/meetings/<store>.py   ― what every store returns
    * meeting_agent/core/agent/*               ― conflict checks, formatting, tools
    * meeting_agent/api/v1/meetings.py         ― public REST endpoints
"""

from __future__ import annotations

import datetime as dt
from functools import lru_cache
from typing import List, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from meeting_agent.config import settings


@lru_cache(maxsize=8)
def get_timezone(name: str | None = None) -> ZoneInfo:
    return ZoneInfo(name or settings.DEFAULT_TIMEZONE)


def parse_datetime(value: str | dt.datetime) -> dt.datetime:
    """
    Parse an ISO-8601 instant into an aware datetime.

    Values without an offset are interpreted in the default timezone.
    Raises ValueError for anything that is not an ISO-8601 date/time.
    """
    if isinstance(value, dt.datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=get_timezone())
    return parsed


def normalize_datetime(value: str | dt.datetime) -> str:
    """ISO-8601 string for ``value``; rejects instants that cannot be shifted to UTC."""
    parsed = parse_datetime(value)
    try:
        parsed.astimezone(dt.timezone.utc)
    except OverflowError as e:
        raise ValueError(f"datetime out of range: {value!r}") from e
    return parsed.isoformat()


class MeetingFields(BaseModel):
    """Optional metadata carried through unchanged by the agent core."""

    notes: Optional[str] = Field(None, description="Free-text notes")
    participants: List[str] = Field(default_factory=list, description="Participant names, in order")
    category: str = Field("other", description="Category tag")
    location: Optional[str] = Field(None, description="Where the meeting happens")
    reminder_minutes: int = Field(15, description="Reminder lead time in minutes")
    is_recurring: bool = Field(False, description="Whether the meeting repeats")
    recurrence_pattern: Optional[str] = Field(None, description="Recurrence rule, free text")


class MeetingCreate(MeetingFields):
    """Meeting coming from the user/LLM (no id yet)."""

    title: str = Field(..., min_length=1, description="Meeting title")
    datetime: str = Field(..., description="Start instant, ISO-8601 with offset")
    duration_minutes: int = Field(..., gt=0, description="Length in minutes")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("datetime", mode="before")
    @classmethod
    def datetime_is_instant(cls, v):
        return normalize_datetime(v)

    @model_validator(mode="after")
    def window_is_representable(self) -> "MeetingCreate":
        try:
            end = parse_datetime(self.datetime) + dt.timedelta(minutes=self.duration_minutes)
            end.astimezone(dt.timezone.utc)
        except OverflowError as e:
            raise ValueError("meeting ends outside the supported date range") from e
        return self


class MeetingUpdate(BaseModel):
    """Partial update; only the fields that are set are written."""

    title: Optional[str] = None
    datetime: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None
    participants: Optional[List[str]] = None
    category: Optional[str] = None
    location: Optional[str] = None
    reminder_minutes: Optional[int] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("title must not be empty")
        return v.strip() if v is not None else v

    @field_validator("datetime", mode="before")
    @classmethod
    def datetime_is_instant(cls, v):
        return normalize_datetime(v) if v is not None else v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class Meeting(MeetingFields):
    """Meeting as stored by a meeting store."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Store-assigned identifier")
    title: str
    datetime: str
    duration_minutes: int
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @property
    def start(self) -> dt.datetime:
        return parse_datetime(self.datetime)

    @property
    def end(self) -> dt.datetime:
        return self.start + dt.timedelta(minutes=self.duration_minutes)


__all__: list[str] = [
    "Meeting", "MeetingCreate", "MeetingUpdate", "MeetingFields",
    "parse_datetime", "normalize_datetime", "get_timezone",
]
