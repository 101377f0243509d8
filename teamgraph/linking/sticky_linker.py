"""
Sticky-to-task linking.

Every Sticky node in the current batch becomes a KanbanCard node plus a
BECAME_TASK edge from the sticky to the card. Re-running over the same
stickies creates new cards; there is no "already linked" check.
"""

import structlog

from ..schema.edges import EdgeType, KnowledgeEdge
from ..schema.graph import GraphBatch
from ..schema.nodes import KnowledgeNode, NodeType
from ..schema.state import ExtractionState
from ..store.base import GraphStore
from ..store.persistence import persist_batch
from ..utils.ids import generate_id

logger = structlog.get_logger()


class StickyTaskLinker:
    """Create Kanban cards for the stickies in a state."""

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    @staticmethod
    def card_for(sticky: KnowledgeNode) -> tuple[KnowledgeNode, KnowledgeEdge]:
        """Build the card node and linking edge for one sticky."""
        card = KnowledgeNode(
            id=generate_id("task"),
            type=NodeType.KANBAN_CARD,
            content=sticky.content,
            metadata={"originalSticky": sticky.id},
        )
        edge = KnowledgeEdge(source=sticky.id, target=card.id, type=EdgeType.BECAME_TASK)
        return card, edge

    async def link(self, state: ExtractionState) -> GraphBatch:
        """
        Link every Sticky in `state.knowledge_nodes` to a new card.

        Each card and edge is persisted before the next sticky is handled.
        """
        created = GraphBatch()
        stickies = [node for node in state.knowledge_nodes if node.type == NodeType.STICKY]

        for sticky in stickies:
            card, edge = self.card_for(sticky)
            await persist_batch(self.store, GraphBatch(nodes=[card], edges=[edge]))
            created.add_node(card)
            created.add_edge(edge)

        if stickies:
            logger.info("Linked stickies to tasks", stickies=len(stickies))
        return created
