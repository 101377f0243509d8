"""
Extractors.

Agents:
- ChatExtractor: Permissive LLM extraction from chat turns
- CalendarExtractor: Strict LLM extraction from calendar events
- StickyExtractor: Deterministic Sticky nodes from whiteboard notes
"""

from .base import AgentResult, BaseExtractor, CompletionClient, LiteLLMClient, MessageExtractor
from .calendar_extractor import CalendarExtractor, parse_calendar_message
from .chat_extractor import ChatExtractor
from .sticky_extractor import StickyExtractor

__all__ = [
    "AgentResult",
    "BaseExtractor",
    "CompletionClient",
    "LiteLLMClient",
    "MessageExtractor",
    "ChatExtractor",
    "CalendarExtractor",
    "parse_calendar_message",
    "StickyExtractor",
]
