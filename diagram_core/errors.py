"""
Graph errors - Exceptions raised by GraphStore mutators.

Queries never raise: unknown vertices and out-of-range indexes return
None or an empty list instead.
"""

from typing import Any


class GraphError(Exception):
    """Base class for graph model errors."""


class NullInputError(GraphError, ValueError):
    """A None vertex or edge (or a None element in a batch) was passed to a mutator."""

    def __init__(self, what: str = "vertex"):
        super().__init__(f"Null {what} passed to graph")
        self.what = what


class MissingEndpointError(GraphError, LookupError):
    """An edge references an origin or destination that is not in the graph."""

    def __init__(self, edge: Any, missing: str):
        super().__init__(f"Edge {edge.source}->{edge.target} references unknown vertex: {missing}")
        self.edge = edge
        self.missing = missing
