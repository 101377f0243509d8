"""Parsing of untrusted model output into a validated graph batch.

The model is asked for {"nodes": [...], "edges": [...]} but nothing
guarantees it complies. Parsing never raises: unparseable text is
reported as None and each entry is validated on its own, so one bad node
does not discard the rest.
"""

import json
import re
from typing import Optional

import structlog
from pydantic import ValidationError

from ..schema.edges import KnowledgeEdge
from ..schema.graph import GraphBatch
from ..schema.nodes import KnowledgeNode

logger = structlog.get_logger()

_FENCE = re.compile(r"```[a-zA-Z]*")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) around a payload."""
    return _FENCE.sub("", text).strip()


def load_graph_json(response_text: str | None) -> Optional[dict]:
    """
    Parse a model completion as a JSON object.

    Args:
        response_text: Raw completion text, possibly fenced.

    Returns dict with keys: nodes, edges, or None if the text is not a
    JSON object.
    """
    if not response_text:
        return None

    text = strip_code_fences(response_text)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}") + 1
        if start < 0 or end <= start:
            logger.warning("Model output is not JSON", preview=text[:200])
            return None
        try:
            data = json.loads(text[start:end])
        except json.JSONDecodeError:
            logger.warning("Model output is not JSON", preview=text[:200])
            return None

    if not isinstance(data, dict):
        logger.warning("Model output is not a JSON object", kind=type(data).__name__)
        return None

    nodes = data.get("nodes")
    edges = data.get("edges")
    return {
        "nodes": nodes if isinstance(nodes, list) else [],
        "edges": edges if isinstance(edges, list) else [],
    }


def coerce_batch(data: dict) -> GraphBatch:
    """
    Validate parsed entries into KnowledgeNode/KnowledgeEdge models.

    Entries that fail validation are dropped individually.
    """
    batch = GraphBatch()
    dropped_nodes = 0
    dropped_edges = 0

    for entry in data.get("nodes", []):
        if not isinstance(entry, dict):
            dropped_nodes += 1
            continue
        try:
            batch.add_node(KnowledgeNode.model_validate(entry))
        except ValidationError:
            dropped_nodes += 1

    for entry in data.get("edges", []):
        if not isinstance(entry, dict):
            dropped_edges += 1
            continue
        try:
            batch.add_edge(KnowledgeEdge.model_validate(entry))
        except ValidationError:
            dropped_edges += 1

    if dropped_nodes or dropped_edges:
        logger.debug(
            "Dropped invalid extraction entries",
            dropped_nodes=dropped_nodes,
            dropped_edges=dropped_edges,
        )
    return batch
