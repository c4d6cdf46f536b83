# meeting_agent/core/agent/conflicts.py

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List

from meeting_agent.core.meetings.schemas import Meeting, parse_datetime

log = logging.getLogger(__name__)


def _overlaps(
    start: dt.datetime, end: dt.datetime, other_start: dt.datetime, other_end: dt.datetime
) -> bool:
    # Touching windows (one ends exactly when the other starts) do not overlap.
    starts_inside = other_start <= start < other_end
    ends_inside = other_start < end <= other_end
    contains_other = start <= other_start and other_end <= end
    return starts_inside or ends_inside or contains_other


def find_conflicts(
    candidate_datetime: str | dt.datetime,
    duration_minutes: int,
    existing: Iterable[Meeting],
) -> List[Meeting]:
    """
    Return the meetings in ``existing`` whose window overlaps the candidate window.

    Meetings whose stored window cannot be parsed or represented are skipped.
    """
    start = parse_datetime(candidate_datetime)
    end = start + dt.timedelta(minutes=duration_minutes)

    conflicts: List[Meeting] = []
    for meeting in existing:
        try:
            other_start = meeting.start
            other_end = meeting.end
        except (ValueError, OverflowError):
            log.warning("Skipping meeting %s in conflict check: bad datetime %r", meeting.id, meeting.datetime)
            continue
        if _overlaps(start, end, other_start, other_end):
            conflicts.append(meeting)

    log.debug("Conflict check %s-%s: %d conflicts", start.isoformat(), end.isoformat(), len(conflicts))
    return conflicts


__all__ = ["find_conflicts"]
