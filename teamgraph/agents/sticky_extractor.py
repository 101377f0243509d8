"""
Whiteboard sticky extraction.

Sticky notes need no language model: each note maps to exactly one
Sticky node keyed by the whiteboard object id.
"""

import structlog

from ..schema.graph import GraphBatch
from ..schema.nodes import KnowledgeNode, NodeType
from ..schema.state import Message, Provenance
from ..utils.ids import sticky_node_id
from .base import AgentResult, MessageExtractor

logger = structlog.get_logger()


class StickyExtractor(MessageExtractor):
    """Turn a whiteboard sticky message into a Sticky node."""

    name = "whiteboard"

    def accepts(self, message: Message) -> bool:
        return message.provenance == Provenance.WHITEBOARD

    async def execute(self, message: Message) -> AgentResult:
        object_id = message.metadata.get("objectId")
        if not object_id:
            logger.warning("Sticky message has no objectId")
            return AgentResult(success=False, errors=["missing objectId"])

        metadata = {"source": Provenance.WHITEBOARD.value, "objectId": object_id}
        if message.metadata.get("roomId"):
            metadata["roomId"] = message.metadata["roomId"]

        batch = GraphBatch()
        batch.add_node(
            KnowledgeNode(
                id=sticky_node_id(object_id),
                type=NodeType.STICKY,
                content=message.content,
                metadata=metadata,
            )
        )
        return AgentResult(success=True, output=batch)
