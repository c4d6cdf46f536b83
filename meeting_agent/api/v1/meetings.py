# meeting_agent/api/v1/meetings.py

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from meeting_agent.api.deps import get_store
from meeting_agent.core.meetings import (
    BaseMeetingStore,
    Meeting,
    MeetingCreate,
    MeetingNotFoundError,
    MeetingStoreError,
    MeetingUpdate,
)
from meeting_agent.core.meetings.schemas import MeetingFields

router = APIRouter(prefix="/api/meetings", tags=["meetings"])
log = logging.getLogger(__name__)


class MeetingIn(MeetingFields):
    """Create payload; required fields are checked by the endpoint for a 400."""
    title: Optional[str] = None
    datetime: Optional[str] = None
    duration_minutes: Optional[int] = None


def _store_failure(action: str, exc: Exception) -> HTTPException:
    log.exception("[API /meetings] %s failed", action)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"An internal error occurred: {type(exc).__name__}",
    )


@router.get("", response_model=List[Meeting], summary="List all meetings")
async def list_meetings(store: BaseMeetingStore = Depends(get_store)) -> List[Meeting]:
    try:
        return await store.list_meetings()
    except MeetingStoreError as e:
        raise _store_failure("list", e) from e


@router.post("", response_model=Meeting, summary="Create a meeting")
async def create_meeting(
    payload: MeetingIn = Body(...),
    store: BaseMeetingStore = Depends(get_store),
) -> Meeting:
    if not payload.title or not payload.datetime or not payload.duration_minutes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")
    try:
        data = MeetingCreate.model_validate(payload.model_dump(exclude_none=True))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
    try:
        meeting = await store.create_meeting(data)
    except MeetingStoreError as e:
        raise _store_failure("create", e) from e
    log.info("[API /meetings] created %s", meeting.id)
    return meeting


@router.put("/{meeting_id}", response_model=Meeting, summary="Update (reschedule) a meeting")
async def update_meeting(
    meeting_id: str,
    payload: MeetingUpdate = Body(...),
    store: BaseMeetingStore = Depends(get_store),
) -> Meeting:
    try:
        return await store.update_meeting(meeting_id, payload)
    except MeetingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meeting not found") from e
    except MeetingStoreError as e:
        raise _store_failure("update", e) from e


@router.delete("/{meeting_id}", summary="Delete a meeting")
async def delete_meeting(
    meeting_id: str,
    store: BaseMeetingStore = Depends(get_store),
) -> dict:
    try:
        await store.delete_meeting(meeting_id)
    except MeetingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meeting not found") from e
    except MeetingStoreError as e:
        raise _store_failure("delete", e) from e
    return {"success": True}
