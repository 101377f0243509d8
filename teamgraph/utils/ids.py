"""
ID generation utilities.
"""

import uuid
from typing import Optional


def generate_id(prefix: Optional[str] = None, length: int = 24) -> str:
    """
    Generate a unique ID.

    Args:
        prefix: Optional prefix for the ID, joined with "-"
        length: Number of hex characters in the random part

    Returns:
        Unique ID string, e.g. "task-5f1c0a9e2b7d4c3e8a6f0b1d"
    """
    uid = uuid.uuid4().hex[:length]
    if prefix:
        return f"{prefix}-{uid}"
    return uid


def meeting_node_id(event_id: str) -> str:
    """Deterministic id of the Meeting node for a calendar event."""
    return f"meeting-{event_id}"


def sticky_node_id(object_id: str) -> str:
    """Deterministic id of the Sticky node for a whiteboard note."""
    return f"sticky-{object_id}"
