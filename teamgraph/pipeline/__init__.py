"""
Pipeline orchestration.

    event → normalize (events) → ExtractionOrchestrator
          → Chat/Calendar/Sticky extractor → persist_batch → graph store

    query → GraphTraversalEngine → SubgraphResult
"""

from .events import (
    CalendarEvent,
    calendar_event_state,
    chat_state,
    format_event_as_message,
    sticky_state,
)
from .orchestrator import ExtractionOrchestrator
from .pipeline import KnowledgePipeline

__all__ = [
    "KnowledgePipeline",
    "ExtractionOrchestrator",
    # Event normalization
    "CalendarEvent",
    "calendar_event_state",
    "chat_state",
    "format_event_as_message",
    "sticky_state",
]
