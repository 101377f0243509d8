"""
Normalization of external events into extraction state.

The calendar adapter, the chat transport and the whiteboard each hand
over their own shapes; these helpers turn them into a single-message
ExtractionState tagged with its provenance.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..schema.state import ExtractionState, Message, Provenance


@dataclass
class CalendarEvent:
    """A calendar event as supplied by the calendar adapter."""

    id: str
    title: str
    start: str
    end: str
    description: Optional[str] = None
    participants: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalendarEvent":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "Untitled",
            start=data.get("start", ""),
            end=data.get("end", ""),
            description=data.get("description"),
            participants=list(data.get("participants") or []),
        )


def format_event_as_message(event: CalendarEvent) -> str:
    """Render an event as the text block the calendar extractor expects."""
    return "\n".join(
        [
            "SOURCE: CALENDAR",
            f"EVENT_ID: {event.id}",
            f'TITLE: "{event.title}"',
            f"TIME: {event.start} - {event.end}",
            f"DESCRIPTION: {event.description or 'No description'}",
            f"PARTICIPANTS: {', '.join(event.participants) or 'None'}",
        ]
    )


def calendar_event_state(event: CalendarEvent) -> ExtractionState:
    """Fresh state wrapping one formatted calendar event."""
    message = Message(
        content=format_event_as_message(event),
        provenance=Provenance.CALENDAR,
        metadata={"eventId": event.id},
    )
    return ExtractionState(messages=[message])


def chat_state(text: str, role: str = "human", history: Optional[list[Message]] = None) -> ExtractionState:
    """State for a chat turn, appended to any prior history."""
    messages = list(history or [])
    messages.append(Message(content=text, role=role, provenance=Provenance.CHAT))
    return ExtractionState(messages=messages)


def sticky_state(object_id: str, content: str, room_id: Optional[str] = None) -> ExtractionState:
    """State for a whiteboard sticky note."""
    metadata: dict[str, Any] = {"objectId": object_id}
    if room_id:
        metadata["roomId"] = room_id
    message = Message(content=content, provenance=Provenance.WHITEBOARD, metadata=metadata)
    return ExtractionState(messages=[message])
