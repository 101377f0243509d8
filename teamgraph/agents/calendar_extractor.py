"""
Calendar extraction agent.

Converts one formatted calendar event into exactly one Meeting node plus
optional Person, Decision and Feature nodes. The model is told the rules,
and the rules are then enforced on whatever it returns:

- the Meeting node id is always "meeting-<EVENT_ID>"
- Decision/Feature nodes require a "DECISION:"/"FEATURE:" marker in the
  event description
- every node carries source/eventId/syncedAt metadata
"""

import re
from datetime import datetime, timezone
from typing import Callable, Optional

import structlog

from ..extraction.prompts import CALENDAR_MARKERS, build_calendar_prompt
from ..schema.edges import KnowledgeEdge
from ..schema.graph import GraphBatch
from ..schema.nodes import KnowledgeNode, NodeType
from ..schema.state import Message, Provenance
from ..utils.ids import meeting_node_id
from .base import BaseExtractor, CompletionClient

logger = structlog.get_logger()

CALENDAR_FIELDS = ("SOURCE", "EVENT_ID", "TITLE", "TIME", "DESCRIPTION", "PARTICIPANTS")

_FIELD_LINE = re.compile(r"^\s*(" + "|".join(CALENDAR_FIELDS) + r"):\s?(.*)$")


def parse_calendar_message(text: str) -> dict[str, str]:
    """
    Parse a formatted calendar block into its fields.

    Lines that do not start with a known field name continue the previous
    field (multi-line descriptions).
    """
    fields: dict[str, str] = {}
    current: Optional[str] = None
    for line in text.splitlines():
        match = _FIELD_LINE.match(line)
        if match:
            current = match.group(1)
            fields[current] = match.group(2).strip()
        elif current is not None and line.strip():
            fields[current] = f"{fields[current]}\n{line.strip()}"
    if "TITLE" in fields:
        fields["TITLE"] = fields["TITLE"].strip('"')
    return fields


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2026-01-02T03:04:05.678Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CalendarExtractor(BaseExtractor):
    """Extract a knowledge batch from a formatted calendar event."""

    name = "calendar"

    def __init__(
        self,
        client: CompletionClient,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        super().__init__(client)
        self.clock = clock

    def _synced_at(self, message: Message) -> str:
        # One timestamp per message, shared by the prompt and the stamping
        return message.metadata.setdefault("syncedAt", self.clock())

    def get_system_prompt(self, message: Message) -> str:
        return build_calendar_prompt(self._synced_at(message))

    def format_input(self, message: Message) -> str:
        return message.content

    def postprocess(self, batch: GraphBatch, message: Message) -> GraphBatch:
        event = parse_calendar_message(message.content)
        event_id = message.metadata.get("eventId") or event.get("EVENT_ID")
        if not event_id:
            logger.warning("Calendar message has no EVENT_ID", preview=message.content[:120])
            return GraphBatch()

        meeting_id = meeting_node_id(event_id)
        description = event.get("DESCRIPTION", "")
        allowed = {NodeType.MEETING, NodeType.PERSON}
        for type_name, marker in CALENDAR_MARKERS.items():
            if marker in description:
                allowed.add(NodeType(type_name))

        metadata = {
            "source": Provenance.CALENDAR.value,
            "eventId": event_id,
            "syncedAt": self._synced_at(message),
        }

        meeting: Optional[KnowledgeNode] = None
        kept: list[KnowledgeNode] = []
        renamed: dict[str, str] = {}
        dropped: set[str] = set()

        for node in batch.nodes:
            if node.type == NodeType.MEETING:
                if meeting is None:
                    if node.id != meeting_id:
                        renamed[node.id] = meeting_id
                    meeting = node.model_copy(update={"id": meeting_id})
                elif node.id != meeting_id:
                    dropped.add(node.id)
                continue
            if node.id == meeting_id:
                continue
            if node.type not in allowed:
                dropped.add(node.id)
                continue
            kept.append(node)

        if meeting is None:
            title = event.get("TITLE", "Untitled")
            time = event.get("TIME", "")
            meeting = KnowledgeNode(
                id=meeting_id,
                type=NodeType.MEETING,
                content=f"{title} ({time})" if time else title,
            )

        result = GraphBatch()
        for node in [meeting, *kept]:
            result.add_node(
                node.model_copy(update={"metadata": {**node.metadata, **metadata}})
            )

        for edge in batch.edges:
            source = renamed.get(edge.source, edge.source)
            target = renamed.get(edge.target, edge.target)
            if source in dropped or target in dropped:
                continue
            result.add_edge(KnowledgeEdge(source=source, target=target, type=edge.type))

        if dropped:
            logger.debug("Dropped calendar nodes", event_id=event_id, dropped=sorted(dropped))
        return result
