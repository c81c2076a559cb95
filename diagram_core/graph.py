"""
Graph Store - Vertex set and edge adjacency structure of a diagram.

This module implements:
- An insertion-ordered, duplicate-free vertex list
- One adjacency row per vertex holding every edge incident to it
- Structural edge deduplication and endpoint-existence checks
- Total queries (unknown input yields None or an empty list)

Duplicate vertices and edges are never stored: adding one again is a
silent no-op.
"""

import logging
from typing import Iterable, Optional

from .errors import MissingEndpointError, NullInputError
from .models import Edge, Vertex

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Owns the vertices and edges of one diagram.

    Rows are keyed by vertex ID. An edge between two distinct vertices is
    stored in both endpoints' rows; a self-loop is stored once in its
    vertex's row. The edge counter counts each edge once.
    """

    def __init__(
        self,
        vertices: Optional[Iterable[Vertex]] = None,
        edges: Optional[Iterable[Edge]] = None
    ):
        self._vertices: dict[str, Vertex] = {}       # vertex_id -> Vertex (insertion order)
        self._adjacency: dict[str, list[Edge]] = {}  # vertex_id -> incident edges
        self._edge_count = 0

        if vertices is not None:
            self.add_vertices(vertices)
        if edges is not None:
            self.add_edges(edges)

    # --- Properties ---

    @property
    def vertex_count(self) -> int:
        """Number of registered vertices."""
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        """Number of registered edges (each edge counted once)."""
        return self._edge_count

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Vertex):
            return self.has_vertex(item)
        if isinstance(item, Edge):
            return self.has_edge(item)
        return False

    # --- Vertex Mutators ---

    def add_vertices(self, vertices: Iterable[Vertex]) -> int:
        """
        Register several vertices, skipping the ones already present.

        The whole batch is checked for None before anything is inserted.

        Returns:
            Number of vertices actually added
        """
        if vertices is None:
            raise NullInputError("vertex list")

        batch = list(vertices)
        if any(vertex is None for vertex in batch):
            raise NullInputError("vertex")

        added = 0
        for vertex in batch:
            if vertex.id not in self._vertices:
                self._vertices[vertex.id] = vertex
                added += 1

        self._reconcile_adjacency()
        logger.debug(f"Added {added} of {len(batch)} vertices ({self.vertex_count} total)")
        return added

    def add_vertex(self, vertex: Vertex) -> bool:
        """Register a vertex. Returns False if it was already present."""
        if vertex is None:
            raise NullInputError("vertex")
        if vertex.id in self._vertices:
            return False

        self._vertices[vertex.id] = vertex
        self._reconcile_adjacency()
        logger.debug(f"Added vertex {vertex.id}")
        return True

    def remove_vertex(self, vertex: Vertex) -> bool:
        """
        Remove a vertex and every edge incident to it.

        Returns:
            False if the vertex is not in the graph, True otherwise
        """
        if vertex is None:
            raise NullInputError("vertex")
        if vertex.id not in self._vertices:
            return False

        # Edges go first so neighbours' rows are cleaned up too
        removed = self.remove_all_edges_of(vertex)
        del self._adjacency[vertex.id]
        del self._vertices[vertex.id]

        logger.debug(f"Removed vertex {vertex.id} and {removed} incident edges")
        return True

    # --- Edge Mutators ---

    def add_edges(self, edges: Iterable[Edge]) -> int:
        """
        Register several edges in order.

        Not atomic: the batch stops at the first None edge or edge with a
        missing endpoint, and the edges before it stay in the graph.

        Returns:
            Number of edges actually added (duplicates are skipped)
        """
        if edges is None:
            raise NullInputError("edge list")

        added = 0
        for edge in edges:
            if self.add_edge(edge):
                added += 1
        return added

    def add_edge(self, edge: Edge) -> bool:
        """
        Register an edge between two registered vertices.

        Returns:
            True if the edge was added, False if an equal edge already exists

        Raises:
            NullInputError: edge is None
            MissingEndpointError: source or target is not registered
        """
        if edge is None:
            raise NullInputError("edge")
        if self.has_edge(edge):
            return False

        for endpoint in (edge.source, edge.target):
            if endpoint not in self._vertices:
                raise MissingEndpointError(edge, endpoint)

        self._adjacency[edge.source].append(edge)
        if not edge.is_loop:
            self._adjacency[edge.target].append(edge)
        self._edge_count += 1

        logger.debug(f"Added edge {edge.source}->{edge.target}")
        return True

    def remove_edge(self, edge: Edge) -> bool:
        """
        Remove every stored occurrence of an edge.

        Returns:
            True if anything was removed
        """
        if edge is None:
            raise NullInputError("edge")

        removed = False
        for endpoint in {edge.source, edge.target}:
            row = self._adjacency.get(endpoint)
            if row is None:
                continue
            kept = [e for e in row if e != edge]
            if len(kept) != len(row):
                self._adjacency[endpoint] = kept
                removed = True

        if removed:
            self._edge_count -= 1
            logger.debug(f"Removed edge {edge.source}->{edge.target}")
        return removed

    def remove_all_edges_of(self, vertex: Vertex) -> int:
        """Remove every edge incident to a vertex. Returns the number removed."""
        if vertex is None:
            raise NullInputError("vertex")

        row = self._adjacency.get(vertex.id)
        if row is None:
            return 0

        removed = 0
        while row:
            self.remove_edge(row[0])
            # remove_edge replaces the row list
            row = self._adjacency[vertex.id]
            removed += 1
        return removed

    def clear(self):
        """Drop all vertices, edges and counters."""
        self._vertices.clear()
        self._adjacency.clear()
        self._edge_count = 0
        logger.debug("Cleared graph")

    # --- Vertex Queries ---

    def all_vertices(self) -> list[Vertex]:
        """All vertices in insertion order."""
        return list(self._vertices.values())

    def vertex_at(self, position: int) -> Optional[Vertex]:
        """Get the vertex at a position, or None when out of range."""
        if 0 <= position < len(self._vertices):
            return list(self._vertices.values())[position]
        return None

    def get_vertex(self, vertex_id: str) -> Optional[Vertex]:
        """Get a vertex by ID (O(1) lookup)."""
        return self._vertices.get(vertex_id)

    def has_vertex(self, vertex: Vertex) -> bool:
        return vertex is not None and vertex.id in self._vertices

    def position_of(self, vertex: Vertex) -> Optional[int]:
        """Get a vertex's position in insertion order, or None if unknown."""
        if not self.has_vertex(vertex):
            return None
        return list(self._vertices).index(vertex.id)

    def adjacent_vertices(self, vertex: Vertex) -> list[Vertex]:
        """
        Map each edge incident to a vertex to its opposite endpoint.

        The result is parallel to edges_of(vertex): parallel edges yield the
        same neighbour more than once, and a self-loop yields the vertex.
        """
        return [
            self._vertices[edge.other_endpoint(vertex.id)]
            for edge in self.edges_of(vertex)
        ]

    def is_adjacent(self, vertex: Vertex, other: Vertex) -> bool:
        """True if an edge in either direction joins the two vertices."""
        return other in self.adjacent_vertices(vertex)

    # --- Edge Queries ---

    def all_edges(self) -> list[Edge]:
        """
        All edges, each once.

        Order follows the scan of rows in vertex order; the first
        occurrence of each edge wins.
        """
        seen: set[Edge] = set()
        edges: list[Edge] = []
        for vertex_id in self._vertices:
            for edge in self._adjacency[vertex_id]:
                if edge not in seen:
                    seen.add(edge)
                    edges.append(edge)
        return edges

    def edges_of(self, vertex: Vertex) -> list[Edge]:
        """Edges incident to a vertex in insertion order (empty if unknown)."""
        if vertex is None:
            return []
        return list(self._adjacency.get(vertex.id, []))

    def edge_at(self, vertex: Vertex, index: int) -> Optional[Edge]:
        """Get the index-th edge of a vertex's row, or None when out of range."""
        row = self.edges_of(vertex)
        if 0 <= index < len(row):
            return row[index]
        return None

    def has_edge(self, edge: Edge) -> bool:
        if edge is None:
            return False
        row = self._adjacency.get(edge.source)
        return row is not None and edge in row

    def edge_count_of(self, vertex: Vertex) -> Optional[int]:
        """Number of edges in a vertex's row, or None if the vertex is unknown."""
        if not self.has_vertex(vertex):
            return None
        return len(self._adjacency[vertex.id])

    # --- Internal ---

    def _reconcile_adjacency(self):
        """Give every vertex without a row an empty one, keeping existing rows."""
        for vertex_id in self._vertices:
            if vertex_id not in self._adjacency:
                self._adjacency[vertex_id] = []
