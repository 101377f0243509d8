"""
Node schema definitions for the knowledge graph.

Node Types:
- Decision: A choice made by the team ("Use React", "Approved design")
- Feature: Functionality linked to the project ("Dark Mode", "Chat")
- Bug: Problems mentioned ("Login failed")
- Tech: Tools and libraries ("Next.js", "MongoDB")
- Meeting: Calendar events or discussions ("Daily Standup")
- Person: Team members
- Sticky: Whiteboard sticky notes
- KanbanCard: Task cards created from stickies

Extractors may emit types outside this list; they are kept as Unknown
so that newer extractors never break older readers.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(str, Enum):
    """Knowledge node types."""

    DECISION = "Decision"
    FEATURE = "Feature"
    BUG = "Bug"
    TECH = "Tech"
    MEETING = "Meeting"
    PERSON = "Person"
    STICKY = "Sticky"
    KANBAN_CARD = "KanbanCard"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> "NodeType":
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        return cls.UNKNOWN


class KnowledgeNode(BaseModel):
    """
    Knowledge graph node.

    `id` is the idempotency key: upserting a node with an existing id
    replaces the stored fields.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    type: NodeType = NodeType.UNKNOWN
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _strip_id(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> NodeType:
        if value is None:
            return NodeType.UNKNOWN
        return NodeType(value)

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def to_document(self) -> dict[str, Any]:
        """Serialize for the document store and the HTTP layer."""
        return self.model_dump(mode="json")
