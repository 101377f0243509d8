"""
Edge schema definitions for the knowledge graph.

Edge Types:
- RELATES_TO: General connection
- BLOCKED_BY: Dependency (A is blocked by B)
- SCHEDULED_FOR: Links a task or topic to a meeting
- BECAME_TASK: A sticky note was turned into a Kanban card

Edges reference node ids only. Nothing checks that either end exists.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EdgeType(str, Enum):
    """Knowledge edge types."""

    RELATES_TO = "RELATES_TO"
    BLOCKED_BY = "BLOCKED_BY"
    SCHEDULED_FOR = "SCHEDULED_FOR"
    BECAME_TASK = "BECAME_TASK"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> "EdgeType":
        if isinstance(value, str):
            normalized = value.strip().upper().replace(" ", "_").replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN


class KnowledgeEdge(BaseModel):
    """
    Knowledge graph edge.

    A directed, typed relationship between two node ids.
    """

    model_config = ConfigDict(extra="ignore")

    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    type: EdgeType = EdgeType.RELATES_TO

    # Assigned by a store when the edge is read back; never serialized
    record_id: Optional[str] = Field(default=None, exclude=True)

    @field_validator("source", "target", mode="before")
    @classmethod
    def _strip_endpoint(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> EdgeType:
        if value is None:
            return EdgeType.UNKNOWN
        return EdgeType(value)

    def to_document(self) -> dict[str, Any]:
        """Serialize as a plain {source, target, type} triple."""
        return self.model_dump(mode="json")

    def triple(self) -> tuple[str, str, str]:
        return (self.source, self.target, self.type.value)
