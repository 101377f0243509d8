"""
Schema definitions for knowledge graph nodes and edges, plus the
per-request extraction state.
"""

from .nodes import KnowledgeNode, NodeType
from .edges import EdgeType, KnowledgeEdge
from .graph import GraphBatch, SubgraphResult
from .state import SEARCH_INTENT, ExtractionStage, ExtractionState, Message, Provenance

__all__ = [
    "KnowledgeNode",
    "NodeType",
    "KnowledgeEdge",
    "EdgeType",
    "GraphBatch",
    "SubgraphResult",
    "ExtractionState",
    "ExtractionStage",
    "Message",
    "Provenance",
    "SEARCH_INTENT",
]
