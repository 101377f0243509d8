"""
Graph store abstraction.

Two logical collections: nodes keyed by id (upsert) and edges (append
only). The store guarantees atomic upsert per node document and nothing
across documents.
"""

from typing import Iterable, Optional, Protocol

from ..schema.edges import KnowledgeEdge
from ..schema.nodes import KnowledgeNode


class GraphStore(Protocol):
    """Abstraction for the backing document store."""

    async def upsert_node(self, node: KnowledgeNode) -> None: ...

    async def insert_edges(self, edges: list[KnowledgeEdge]) -> None: ...

    async def find_incident_edges(self, node_id: str) -> list[KnowledgeEdge]: ...

    async def find_outgoing_edges(self, source_ids: Iterable[str]) -> list[KnowledgeEdge]: ...

    async def find_nodes(self, node_ids: Iterable[str]) -> list[KnowledgeNode]: ...

    async def list_nodes(self, exclude_source: Optional[str] = None) -> list[KnowledgeNode]: ...

    async def list_edges(self) -> list[KnowledgeEdge]: ...
