"""
In-process graph store.

Edges live in an append-only arena; source and target indexes map a node
id to arena positions. Nodes are a dict keyed by id. Used by tests, demos
and single-process deployments.
"""

from collections import defaultdict
from typing import Iterable, Optional

from ..schema.edges import KnowledgeEdge
from ..schema.nodes import KnowledgeNode


class InMemoryGraphStore:
    """GraphStore kept in process memory."""

    def __init__(self) -> None:
        self.nodes: dict[str, KnowledgeNode] = {}
        self.edges: list[KnowledgeEdge] = []
        self._by_source: dict[str, list[int]] = defaultdict(list)
        self._by_target: dict[str, list[int]] = defaultdict(list)

    async def upsert_node(self, node: KnowledgeNode) -> None:
        self.nodes[node.id] = node.model_copy(deep=True)

    async def insert_edges(self, edges: list[KnowledgeEdge]) -> None:
        for edge in edges:
            position = len(self.edges)
            record = KnowledgeEdge(
                source=edge.source,
                target=edge.target,
                type=edge.type,
                record_id=str(position),
            )
            self.edges.append(record)
            self._by_source[record.source].append(position)
            self._by_target[record.target].append(position)

    async def find_incident_edges(self, node_id: str) -> list[KnowledgeEdge]:
        positions = sorted(set(self._by_source.get(node_id, [])) | set(self._by_target.get(node_id, [])))
        return [self.edges[p] for p in positions]

    async def find_outgoing_edges(self, source_ids: Iterable[str]) -> list[KnowledgeEdge]:
        positions: set[int] = set()
        for source_id in source_ids:
            positions.update(self._by_source.get(source_id, []))
        return [self.edges[p] for p in sorted(positions)]

    async def find_nodes(self, node_ids: Iterable[str]) -> list[KnowledgeNode]:
        wanted = set(node_ids)
        return [node for node_id, node in self.nodes.items() if node_id in wanted]

    async def list_nodes(self, exclude_source: Optional[str] = None) -> list[KnowledgeNode]:
        if exclude_source is None:
            return list(self.nodes.values())
        return [
            node for node in self.nodes.values()
            if node.metadata.get("source") != exclude_source
        ]

    async def list_edges(self) -> list[KnowledgeEdge]:
        return list(self.edges)

    def __len__(self) -> int:
        return len(self.nodes)

    def summary(self) -> str:
        return f"InMemoryGraphStore(nodes={len(self.nodes)}, edges={len(self.edges)})"
