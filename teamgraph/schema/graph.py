"""
Node/edge batch containers passed between pipeline stages.
"""

from typing import Any

from pydantic import BaseModel, Field

from .nodes import KnowledgeNode
from .edges import KnowledgeEdge


class GraphBatch(BaseModel):
    """
    A batch of nodes and edges.

    Produced by extractors and the task linker, consumed by the
    persistence adapter. Unlike a full graph, a batch accepts edges whose
    endpoints are not part of it.
    """

    nodes: list[KnowledgeNode] = Field(default_factory=list)
    edges: list[KnowledgeEdge] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "GraphBatch":
        return cls()

    def add_node(self, node: KnowledgeNode) -> None:
        """Add a node to the batch."""
        self.nodes.append(node)

    def add_edge(self, edge: KnowledgeEdge) -> None:
        """Add an edge to the batch."""
        self.edges.append(edge)

    def get_node(self, node_id: str) -> KnowledgeNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def to_payload(self) -> dict[str, Any]:
        """Shape expected by the HTTP layer."""
        return {
            "knowledgeNodes": [node.to_document() for node in self.nodes],
            "knowledgeEdges": [edge.to_document() for edge in self.edges],
        }

    def __len__(self) -> int:
        return len(self.nodes)

    def summary(self) -> str:
        """Return a summary of the batch."""
        return f"GraphBatch(nodes={len(self.nodes)}, edges={len(self.edges)})"


class SubgraphResult(BaseModel):
    """Connected subgraph returned by a traversal."""

    nodes: list[KnowledgeNode] = Field(default_factory=list)
    edges: list[KnowledgeEdge] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def to_payload(self) -> dict[str, Any]:
        return {
            "searchResults": {
                "nodes": [node.to_document() for node in self.nodes],
                "edges": [edge.to_document() for edge in self.edges],
            }
        }

    def summary(self) -> str:
        return f"SubgraphResult(nodes={len(self.nodes)}, edges={len(self.edges)})"
