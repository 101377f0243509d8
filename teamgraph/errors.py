"""
Exception hierarchy.

Only StorageError escapes the pipeline; model-side failures are turned
into empty batches at the extractor boundary.
"""


class TeamGraphError(Exception):
    """Base class for teamgraph errors."""


class ModelServiceError(TeamGraphError):
    """The completion service could not produce a response."""


class StorageError(TeamGraphError):
    """A read or write against the graph store failed."""
