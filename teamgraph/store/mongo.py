"""
MongoDB-backed graph store.

Collections:
- knowledgeNodes: one document per node, unique index on `id`
- knowledgeEdges: one document per edge record, indexed on source/target

Dependency: motor (async driver over pymongo).
"""

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import ValidationError
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..config import PipelineConfig
from ..errors import StorageError
from ..schema.edges import KnowledgeEdge
from ..schema.nodes import KnowledgeNode

logger = structlog.get_logger()


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.error("Graph store operation failed", operation=operation, error=str(e))
        raise StorageError(f"{operation} failed: {e}") from e


def _nodes_from_documents(docs: list[dict[str, Any]]) -> list[KnowledgeNode]:
    nodes = []
    for doc in docs:
        try:
            nodes.append(
                KnowledgeNode.model_validate({k: v for k, v in doc.items() if k != "_id"})
            )
        except ValidationError as e:
            logger.warning("Skipping malformed node document", _id=str(doc.get("_id")), error=str(e))
    return nodes


def _edges_from_documents(docs: list[dict[str, Any]]) -> list[KnowledgeEdge]:
    # Stored edges may lack source or target
    edges = []
    for doc in docs:
        try:
            edges.append(
                KnowledgeEdge(
                    source=doc.get("source"),
                    target=doc.get("target"),
                    type=doc.get("type"),
                    record_id=str(doc["_id"]),
                )
            )
        except ValidationError as e:
            logger.warning("Skipping malformed edge document", _id=str(doc.get("_id")), error=str(e))
    return edges


class MongoGraphStore:
    """
    GraphStore over two MongoDB collections.

    Node upserts use update_one(..., upsert=True) which is atomic per
    document; edge inserts are plain inserts with no existence check.
    """

    def __init__(self, nodes_collection: Any, edges_collection: Any) -> None:
        self.nodes = nodes_collection
        self.edges = edges_collection
        self._client: Optional[AsyncIOMotorClient] = None

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "MongoGraphStore":
        """Connect using the URI and collection names in `config`."""
        client = AsyncIOMotorClient(config.mongo_uri)
        db = client[config.database]
        store = cls(db[config.nodes_collection], db[config.edges_collection])
        store._client = client
        return store

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    async def ensure_indexes(self) -> None:
        with _storage_errors("ensure_indexes"):
            await self.nodes.create_index([("id", ASCENDING)], unique=True)
            await self.edges.create_index([("source", ASCENDING)])
            await self.edges.create_index([("target", ASCENDING)])

    async def upsert_node(self, node: KnowledgeNode) -> None:
        with _storage_errors("upsert_node"):
            await self.nodes.update_one(
                {"id": node.id},
                {"$set": node.to_document()},
                upsert=True,
            )

    async def insert_edges(self, edges: list[KnowledgeEdge]) -> None:
        if not edges:
            return
        with _storage_errors("insert_edges"):
            await self.edges.insert_many([edge.to_document() for edge in edges])

    async def find_incident_edges(self, node_id: str) -> list[KnowledgeEdge]:
        query = {"$or": [{"source": node_id}, {"target": node_id}]}
        with _storage_errors("find_incident_edges"):
            docs = await self.edges.find(query).to_list(length=None)
        return _edges_from_documents(docs)

    async def find_outgoing_edges(self, source_ids: Iterable[str]) -> list[KnowledgeEdge]:
        ids = list(source_ids)
        if not ids:
            return []
        with _storage_errors("find_outgoing_edges"):
            docs = await self.edges.find({"source": {"$in": ids}}).to_list(length=None)
        return _edges_from_documents(docs)

    async def find_nodes(self, node_ids: Iterable[str]) -> list[KnowledgeNode]:
        ids = list(node_ids)
        if not ids:
            return []
        with _storage_errors("find_nodes"):
            docs = await self.nodes.find({"id": {"$in": ids}}).to_list(length=None)
        return _nodes_from_documents(docs)

    async def list_nodes(self, exclude_source: Optional[str] = None) -> list[KnowledgeNode]:
        query: dict[str, Any] = {}
        if exclude_source is not None:
            query = {"metadata.source": {"$ne": exclude_source}}
        with _storage_errors("list_nodes"):
            docs = await self.nodes.find(query).to_list(length=None)
        return _nodes_from_documents(docs)

    async def list_edges(self) -> list[KnowledgeEdge]:
        with _storage_errors("list_edges"):
            docs = await self.edges.find({}).to_list(length=None)
        return _edges_from_documents(docs)
