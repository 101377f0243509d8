"""
Graph store backends and the persistence adapter.
"""

from .base import GraphStore
from .memory import InMemoryGraphStore
from .mongo import MongoGraphStore
from .persistence import persist_batch

__all__ = ["GraphStore", "InMemoryGraphStore", "MongoGraphStore", "persist_batch"]
