# meeting_agent/core/agent/orchestrator.py

from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from meeting_agent.core.llm.client import LLMClient
from meeting_agent.core.llm.message import Message
from meeting_agent.core.meetings.base import BaseMeetingStore
from meeting_agent.core.meetings.schemas import Meeting

from . import prompts
from .extraction import Complete, Incomplete, SlotFiller
from .intents import Intent, classify
from .tools import MeetingTools

log = logging.getLogger(__name__)

APOLOGY_TEXT = "I apologize, but I encountered an error. Could you please try again?"

Collecting = Literal["meeting", "reschedule", "delete", "search"]

# What the caller is hinted we are mid-collecting after an Incomplete extraction.
COLLECTING: Dict[Intent, Collecting] = {
    Intent.SCHEDULE: "meeting",
    Intent.RESCHEDULE: "reschedule",
    Intent.DELETE: "delete",
    Intent.SEARCH: "search",
}


class ConversationState(BaseModel):
    """Advisory hint for the caller; never read back on the next turn."""
    collecting: Optional[Collecting] = None


class TurnResult(BaseModel):
    reply: str
    state: ConversationState = Field(default_factory=ConversationState)


class MeetingAgent:
    """
    Per-turn entry point: classify the utterance, route it, return a reply.

    Holds no conversation state; the caller passes the full history on every turn
    and every turn is classified from scratch.
    """

    def __init__(self, llm: LLMClient, store: BaseMeetingStore) -> None:
        self.llm = llm
        self.store = store
        self.slot_filler = SlotFiller(llm)
        self.tools = MeetingTools(store)

    async def handle_turn(self, utterance: str, history: Sequence[Message] = ()) -> TurnResult:
        try:
            return await self._handle_turn(utterance, list(history))
        except Exception as e:
            log.exception("Agent turn failed: %s", type(e).__name__)
            return TurnResult(reply=APOLOGY_TEXT)

    async def _handle_turn(self, utterance: str, history: List[Message]) -> TurnResult:
        meetings = await self.store.list_meetings()
        intent = classify(utterance)
        log.info("Turn intent=%s (history=%d, meetings=%d)", intent.value, len(history), len(meetings))

        if intent is Intent.LIST:
            return TurnResult(reply=await self.tools.list_meetings())
        if intent is Intent.GENERAL:
            return TurnResult(reply=await self._converse(utterance, history, meetings))

        result = await self.slot_filler.extract(intent, utterance, history, meetings)
        if isinstance(result, Incomplete):
            return TurnResult(
                reply=result.follow_up,
                state=ConversationState(collecting=COLLECTING[intent]),
            )
        return TurnResult(reply=await self._dispatch(result, meetings))

    async def _dispatch(self, result: Complete, meetings: List[Meeting]) -> str:
        fields = result.fields
        log.info("Dispatching action=%s", result.action)
        if result.action == "create":
            return await self.tools.create_meeting(fields, meetings)
        if result.action == "update":
            return await self.tools.update_meeting(fields["meetingId"], fields["newDatetime"], meetings)
        if result.action == "delete":
            return await self.tools.delete_meeting(fields["meetingId"], meetings)
        return await self.tools.search_meetings(fields["query"], meetings)

    async def _converse(self, utterance: str, history: List[Message], meetings: List[Meeting]) -> str:
        return await self.llm.generate(utterance + prompts.general_context(meetings), history)


__all__ = ["MeetingAgent", "TurnResult", "ConversationState", "APOLOGY_TEXT"]
