"""
Extraction state management.

The state is built per request and discarded once the response is
produced. The graph store, not this object, is the system of record.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .edges import KnowledgeEdge
from .graph import GraphBatch, SubgraphResult
from .nodes import KnowledgeNode

SEARCH_INTENT = "search"


class Provenance(str, Enum):
    """Origin of an input event."""

    CHAT = "chat"
    CALENDAR = "calendar"
    WHITEBOARD = "whiteboard"


class ExtractionStage(Enum):
    """Extraction stages."""

    IDLE = "idle"
    EXTRACTING = "extracting"
    PERSISTED = "persisted"
    FAILED_SOFT = "failed_soft"


@dataclass
class Message:
    """A role-tagged conversation turn."""

    content: str
    role: str = "human"
    provenance: Provenance = Provenance.CHAT
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_human(self) -> bool:
        return self.role in ("human", "user")


@dataclass
class ExtractionState:
    """
    Per-request extraction state.

    Carries the conversation log, the latest extracted batch, the
    traversal intent and the latest traversal result.
    """

    messages: list[Message] = field(default_factory=list)
    knowledge_nodes: list[KnowledgeNode] = field(default_factory=list)
    knowledge_edges: list[KnowledgeEdge] = field(default_factory=list)
    intent: Optional[str] = None
    search_results: SubgraphResult = field(default_factory=SubgraphResult)

    # Tracking
    stage: ExtractionStage = ExtractionStage.IDLE
    warnings: list[str] = field(default_factory=list)
    processing_log: list[str] = field(default_factory=list)

    @property
    def last_message(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def add_message(self, message: Message) -> None:
        self.messages.append(message)

    def apply_batch(self, batch: GraphBatch) -> None:
        """Replace the latest extraction with `batch`."""
        self.knowledge_nodes = list(batch.nodes)
        self.knowledge_edges = list(batch.edges)

    def log(self, message: str) -> None:
        """Add a log message."""
        self.processing_log.append(message)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)
        self.log(f"WARNING: {warning}")

    def advance_to(self, stage: ExtractionStage) -> None:
        """Advance to a new stage."""
        self.log(f"Stage: {self.stage.value} → {stage.value}")
        self.stage = stage

    def summary(self) -> dict:
        """Return a summary of the state."""
        return {
            "stage": self.stage.value,
            "messages": len(self.messages),
            "nodes": len(self.knowledge_nodes),
            "edges": len(self.knowledge_edges),
            "intent": self.intent,
            "warnings": len(self.warnings),
        }
