"""
Conversation core.

• ``classify`` – keyword intent routing (intents.py).
• ``SlotFiller`` – LLM extraction into ``Complete`` / ``Incomplete`` (extraction.py).
• ``find_conflicts`` – overlap detection (conflicts.py).
• ``MeetingTools`` – list/create/update/delete/search actions (tools.py).
• ``format_meetings`` – speech-friendly rendering (formatter.py).
• ``MeetingAgent`` – per-turn orchestrator tying the above together.
"""
from __future__ import annotations

from .conflicts import find_conflicts
from .extraction import Complete, ExtractionResult, Incomplete, SlotFiller
from .formatter import format_meeting, format_meetings
from .intents import Intent, classify
from .orchestrator import APOLOGY_TEXT, ConversationState, MeetingAgent, TurnResult
from .tools import MeetingTools

__all__: list[str] = [
    "APOLOGY_TEXT",
    "Complete",
    "ConversationState",
    "ExtractionResult",
    "Incomplete",
    "Intent",
    "MeetingAgent",
    "MeetingTools",
    "SlotFiller",
    "TurnResult",
    "classify",
    "find_conflicts",
    "format_meeting",
    "format_meetings",
]
