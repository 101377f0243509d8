"""Bounded graph traversal."""

from .engine import DEFAULT_MAX_FORWARD_DEPTH, GraphTraversalEngine

__all__ = ["DEFAULT_MAX_FORWARD_DEPTH", "GraphTraversalEngine"]
