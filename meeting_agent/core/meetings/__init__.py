"""
Meeting store package.

• ``Meeting`` / ``MeetingCreate`` / ``MeetingUpdate`` – pydantic schemas (see schemas.py).
• ``BaseMeetingStore`` – abstract store interface.
• ``get_meeting_store()`` – factory returning the process-wide store selected
  by name or by ``settings.MEETING_STORE``.

The SQL store is imported lazily so the in-memory fallback never needs a
database driver.
"""
from __future__ import annotations

import importlib
import logging
from typing import Callable, Dict

from meeting_agent.config import settings
from .base import BaseMeetingStore
from .exceptions import MeetingNotFoundError, MeetingStoreError
from .schemas import Meeting, MeetingCreate, MeetingUpdate

log = logging.getLogger(__name__)


def _build_memory_store() -> BaseMeetingStore:
    module = importlib.import_module(f"{__name__}.memory")
    return module.InMemoryMeetingStore()


def _build_sql_store() -> BaseMeetingStore:
    module = importlib.import_module(f"{__name__}.sql")
    db = importlib.import_module("meeting_agent.db.base")
    return module.SqlMeetingStore(db.get_session_factory())


_STORE_BUILDERS: Dict[str, Callable[[], BaseMeetingStore]] = {
    "memory": _build_memory_store,
    "sql": _build_sql_store,
}

_store_instance: BaseMeetingStore | None = None


def get_meeting_store(name: str | None = None) -> BaseMeetingStore:
    """
    Return the meeting store.

    • ``name`` – explicit backend name, builds a fresh instance.
    • Without a name the process-wide instance for ``settings.MEETING_STORE``
      is created on first call and reused afterwards.
    """
    global _store_instance
    if name is None and _store_instance is not None:
        return _store_instance

    store_key = (name or settings.MEETING_STORE).lower()
    try:
        builder = _STORE_BUILDERS[store_key]
    except KeyError as exc:
        raise ValueError(f"Unknown meeting store: {store_key}") from exc
    store = builder()
    log.info("Meeting store initialized: %s", store.name)
    if name is None:
        _store_instance = store
    return store


__all__: list[str] = [
    "Meeting",
    "MeetingCreate",
    "MeetingUpdate",
    "BaseMeetingStore",
    "MeetingNotFoundError",
    "MeetingStoreError",
    "get_meeting_store",
]
