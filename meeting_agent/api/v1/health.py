from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from meeting_agent.api.deps import get_store
from meeting_agent.config import settings
from meeting_agent.core.meetings import BaseMeetingStore

router = APIRouter(tags=["Health"])
log = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
async def health():
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def healthz(store: BaseMeetingStore = Depends(get_store)):
    out: dict[str, str] = {"status": "ok", "environment": settings.ENVIRONMENT}

    # Meeting store
    try:
        await store.list_meetings()
        out["store"] = store.name
    except Exception as exc:  # noqa: BLE001
        log.exception("Meeting store health check failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="store error") from exc

    out["llm"] = settings.LLM_PROVIDER
    return out
