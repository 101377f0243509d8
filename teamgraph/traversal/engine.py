"""
Bounded subgraph retrieval.

Two phases:
1. Seed edges: every edge touching the start node, in either direction.
2. Forward extension: from each seed edge's target, follow edges whose
   source is the previous target, up to `max_forward_depth` more hops.

The extension only walks forward. Nothing is explored behind a seed
edge's source, and a start node without incident edges yields an empty
result even if the node itself exists.
"""

from typing import Optional

import structlog

from ..schema.edges import KnowledgeEdge
from ..schema.graph import SubgraphResult
from ..schema.state import SEARCH_INTENT, ExtractionState
from ..store.base import GraphStore

logger = structlog.get_logger()

DEFAULT_MAX_FORWARD_DEPTH = 2


def _edge_key(edge: KnowledgeEdge) -> str:
    return edge.record_id or "|".join(edge.triple())


class GraphTraversalEngine:
    """Resolve a traversal intent and fetch the surrounding subgraph."""

    def __init__(
        self,
        store: GraphStore,
        max_forward_depth: int = DEFAULT_MAX_FORWARD_DEPTH,
    ) -> None:
        if max_forward_depth < 0:
            raise ValueError("max_forward_depth must be >= 0")
        self.store = store
        self.max_forward_depth = max_forward_depth

    def resolve_start(self, state: ExtractionState) -> Optional[str]:
        """
        Pick the start node id for `state`.

        A concrete intent is used as-is. The "search" intent falls back to
        the first freshly extracted node; without one there is no start.
        """
        start_id = state.intent
        if start_id == SEARCH_INTENT and state.knowledge_nodes:
            start_id = state.knowledge_nodes[0].id
        if not start_id or start_id == SEARCH_INTENT:
            return None
        return start_id

    async def traverse(self, start_id: str) -> SubgraphResult:
        """
        Collect the bounded subgraph around `start_id`.

        Args:
            start_id: Node id to start from. It need not exist as a node.

        Returns:
            SubgraphResult with fetched nodes and {source, target, type} edges
        """
        logger.info("Graph search starting", start_node_id=start_id)

        seeds = await self.store.find_incident_edges(start_id)
        if not seeds:
            return SubgraphResult()

        collected: dict[str, KnowledgeEdge] = {}
        for edge in seeds:
            collected.setdefault(_edge_key(edge), edge)

        frontier = {edge.target for edge in seeds}
        expanded: set[str] = set()
        for _ in range(self.max_forward_depth):
            frontier -= expanded
            if not frontier:
                break
            expanded |= frontier
            next_frontier: set[str] = set()
            for edge in await self.store.find_outgoing_edges(sorted(frontier)):
                collected.setdefault(_edge_key(edge), edge)
                next_frontier.add(edge.target)
            frontier = next_frontier

        node_ids: dict[str, int] = {start_id: 0}
        for edge in collected.values():
            for node_id in (edge.source, edge.target):
                node_ids.setdefault(node_id, len(node_ids))

        nodes = await self.store.find_nodes(list(node_ids))
        nodes.sort(key=lambda node: node_ids.get(node.id, len(node_ids)))

        edges = [
            KnowledgeEdge(source=edge.source, target=edge.target, type=edge.type)
            for edge in collected.values()
        ]
        logger.debug(
            "Graph search finished",
            start_node_id=start_id,
            nodes=len(nodes),
            edges=len(edges),
        )
        return SubgraphResult(nodes=nodes, edges=edges)

    async def retrieve(self, state: ExtractionState) -> SubgraphResult:
        """Resolve the intent in `state` and traverse from it."""
        start_id = self.resolve_start(state)
        if start_id is None:
            return SubgraphResult()
        return await self.traverse(start_id)
