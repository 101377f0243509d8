"""Persistence adapter: apply a candidate batch to the graph store.

Nodes are upserted concurrently, then edges are appended. There is no
rollback: if the edge insert fails after the node upserts succeeded, the
nodes stay (at-least-once, not exactly-once).
"""

import asyncio

import structlog

from ..schema.graph import GraphBatch
from .base import GraphStore

logger = structlog.get_logger()


async def persist_batch(store: GraphStore, batch: GraphBatch) -> GraphBatch:
    """
    Upsert nodes by id and append edges.

    Args:
        store: Target graph store.
        batch: Nodes and edges to write.

    Returns the batch that was written. StorageError propagates.
    """
    if batch.nodes:
        await asyncio.gather(*(store.upsert_node(node) for node in batch.nodes))

    if batch.edges:
        await store.insert_edges(batch.edges)

    logger.debug("Persisted batch", nodes=len(batch.nodes), edges=len(batch.edges))
    return batch
