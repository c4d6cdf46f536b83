# meeting_agent/api/v1/chat.py

from __future__ import annotations

import logging
from typing import Dict, List, Literal

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from meeting_agent.api.deps import get_meeting_agent
from meeting_agent.core.agent import MeetingAgent
from meeting_agent.core.llm.message import Message

router = APIRouter(prefix="/api", tags=["chat"])
log = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    conversation_history: List[ChatMessage] = Field(default_factory=list, alias="conversationHistory")


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    conversation_state: Dict[str, str] = Field(default_factory=dict, alias="conversationState")


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Send one conversational turn",
    description="Classifies the message, runs the matching meeting action and returns a speakable reply.",
)
async def chat_endpoint(
    agent: MeetingAgent = Depends(get_meeting_agent),
    payload: ChatRequest = Body(...),
) -> ChatResponse:
    if not payload.message.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message is required")

    log.info("[API /chat] request: '%.50s...' (history=%d)", payload.message, len(payload.conversation_history))
    history: List[Message] = [
        Message(role=m.role, content=m.content) for m in payload.conversation_history
    ]
    result = await agent.handle_turn(payload.message, history)
    log.info("[API /chat] reply: '%.50s...' state=%s", result.reply, result.state.collecting)

    return ChatResponse(
        response=result.reply,
        conversation_state=result.state.model_dump(exclude_none=True),
    )
