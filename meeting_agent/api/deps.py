# meeting_agent/api/deps.py
"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Depends

from meeting_agent.core.agent import MeetingAgent
from meeting_agent.core.llm.client import LLMClient
from meeting_agent.core.meetings import BaseMeetingStore, get_meeting_store


def get_llm_client() -> LLMClient:
    return LLMClient()


def get_store() -> BaseMeetingStore:
    return get_meeting_store()


def get_meeting_agent(
    llm: LLMClient = Depends(get_llm_client),
    store: BaseMeetingStore = Depends(get_store),
) -> MeetingAgent:
    return MeetingAgent(llm=llm, store=store)
