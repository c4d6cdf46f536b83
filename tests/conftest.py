import os
import sys
from collections import deque
from typing import Iterable, List, Sequence

# Ensure Python path includes project root for `import meeting_agent`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Test environment: stub LLM, in-memory meetings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LLM_PROVIDER", "stub")
os.environ.setdefault("MEETING_STORE", "memory")

import pytest

from meeting_agent.core.llm.client import LLMClient
from meeting_agent.core.llm.message import Message
from meeting_agent.core.llm.providers.base import BaseLLMProvider
from meeting_agent.core.meetings.memory import InMemoryMeetingStore
from meeting_agent.core.meetings.schemas import Meeting, MeetingCreate, MeetingUpdate


class ScriptedLLMProvider(BaseLLMProvider):
    """Replays queued replies and records every prompt it was given."""
    name = "scripted"

    def __init__(self, replies: Iterable[str] = ()):
        self.replies = deque(replies)
        self.calls: List[tuple] = []

    def queue(self, *replies: str) -> None:
        self.replies.extend(replies)

    async def generate(self, prompt: str, context: Sequence[Message]) -> str:
        self.calls.append((prompt, list(context)))
        if not self.replies:
            raise AssertionError("ScriptedLLMProvider ran out of replies")
        reply = self.replies.popleft()
        if isinstance(reply, Exception):
            raise reply
        return reply


class RecordingMeetingStore(InMemoryMeetingStore):
    """In-memory store that counts mutating calls."""

    def __init__(self) -> None:
        super().__init__()
        self.create_calls = 0
        self.update_calls = 0
        self.delete_calls = 0

    @property
    def mutation_calls(self) -> int:
        return self.create_calls + self.update_calls + self.delete_calls

    async def create_meeting(self, data: MeetingCreate) -> Meeting:
        self.create_calls += 1
        return await super().create_meeting(data)

    async def update_meeting(self, meeting_id: str, changes: MeetingUpdate) -> Meeting:
        self.update_calls += 1
        return await super().update_meeting(meeting_id, changes)

    async def delete_meeting(self, meeting_id: str) -> None:
        self.delete_calls += 1
        return await super().delete_meeting(meeting_id)


def make_meeting(title: str, datetime: str, duration_minutes: int = 60, **extra) -> Meeting:
    return Meeting(
        id=extra.pop("id", title.lower().replace(" ", "-")),
        title=title,
        datetime=datetime,
        duration_minutes=duration_minutes,
        **extra,
    )


@pytest.fixture
def provider() -> ScriptedLLMProvider:
    return ScriptedLLMProvider()


@pytest.fixture
def llm(provider: ScriptedLLMProvider) -> LLMClient:
    return LLMClient(provider=provider)


@pytest.fixture
def store() -> RecordingMeetingStore:
    return RecordingMeetingStore()
