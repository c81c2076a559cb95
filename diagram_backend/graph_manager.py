"""
Graph Manager - Editor-side owner of the graph being edited.

This module implements:
- Single graph state management (one graph open at a time)
- ID-based access to vertices and edges for the API
- Deletion cascades (removing a vertex removes its edges)
- Traversal, distance and layout requests delegated to diagram_core
- Change callbacks for real-time sync
"""

import logging
from typing import Optional, Callable

from diagram_core.analysis import summarize_graph, GraphSummary
from diagram_core.distance import distance as hop_distance
from diagram_core.graph import GraphStore
from diagram_core.layout import apply_layout
from diagram_core.models import Edge, Vertex
from diagram_core.traversal import TraversalMode, TraversalOrder, traverse
from diagram_core.validation import validate_graph, ValidationIssue

logger = logging.getLogger(__name__)


class GraphManager:
    """
    Manages a single graph's state and change notifications.

    The GraphStore identifies edges by their endpoints; the manager keeps
    an index from edge ID to edge so API clients can address an edge by
    its handle.
    """

    def __init__(self, name: str = "Untitled Graph"):
        self._graph = GraphStore()
        self._name = name
        self._dirty = False
        self._on_change_callbacks: list[Callable] = []

        self._edge_index: dict[str, Edge] = {}  # edge_id -> Edge

    # --- Properties ---

    @property
    def graph(self) -> GraphStore:
        """Get the current graph."""
        return self._graph

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_dirty(self) -> bool:
        """Check if the graph changed since it was created."""
        return self._dirty

    # --- Change Callbacks ---

    def on_change(self, callback: Callable):
        """Register a callback for graph changes."""
        self._on_change_callbacks.append(callback)

    def remove_on_change(self, callback: Callable):
        if callback in self._on_change_callbacks:
            self._on_change_callbacks.remove(callback)

    def _notify_change(self):
        """Notify all registered callbacks of a change."""
        self._dirty = True
        for callback in self._on_change_callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Graph change callback failed")

    # --- Graph Operations ---

    def new_graph(self, name: str = "Untitled Graph") -> GraphStore:
        """Drop everything and start an empty graph."""
        self._graph.clear()
        self._edge_index.clear()
        self._name = name
        self._notify_change()
        self._dirty = False
        logger.info(f"Started new graph '{name}'")
        return self._graph

    # --- Vertex Operations ---

    def add_vertex(self, **kwargs) -> Vertex:
        """Add a new vertex to the graph."""
        vertex = Vertex(**kwargs)
        self._graph.add_vertex(vertex)
        self._notify_change()
        return vertex

    def update_vertex(self, vertex_id: str, **kwargs) -> Optional[Vertex]:
        """Update an existing vertex's attributes."""
        vertex = self._graph.get_vertex(vertex_id)
        if vertex is None:
            return None

        # Update only provided fields
        for key, value in kwargs.items():
            if value is not None and key != "id" and hasattr(vertex, key):
                setattr(vertex, key, value)

        self._notify_change()
        return vertex

    def delete_vertex(self, vertex_id: str) -> bool:
        """Delete a vertex and all connected edges."""
        vertex = self._graph.get_vertex(vertex_id)
        if vertex is None:
            return False

        for edge in self._graph.edges_of(vertex):
            self._edge_index.pop(edge.id, None)
        self._graph.remove_vertex(vertex)

        self._notify_change()
        return True

    def get_vertex(self, vertex_id: str) -> Optional[Vertex]:
        """Get a vertex by ID (O(1) lookup)."""
        return self._graph.get_vertex(vertex_id)

    def get_adjacent_vertices(self, vertex_id: str) -> Optional[list[Vertex]]:
        """Get the neighbour of each edge of a vertex, or None if the vertex is unknown."""
        vertex = self._graph.get_vertex(vertex_id)
        if vertex is None:
            return None
        return self._graph.adjacent_vertices(vertex)

    # --- Edge Operations ---

    def add_edge(self, source: str = None, target: str = None,
                 label: str = "", color: str = "#000000") -> Edge:
        """
        Add a new edge between two vertices.

        Raises:
            ValueError: an endpoint is not specified or the edge already exists
            MissingEndpointError: an endpoint is not in the graph
        """
        if not source or not target:
            raise ValueError("Both source and target vertices must be specified")

        edge = Edge(source=source, target=target, label=label, color=color)
        if not self._graph.add_edge(edge):
            raise ValueError(f"Edge already exists: {source} -> {target}")

        self._edge_index[edge.id] = edge
        self._notify_change()
        return edge

    def delete_edge(self, edge_id: str) -> bool:
        """Delete an edge."""
        edge = self._edge_index.pop(edge_id, None)
        if edge is None:
            return False

        self._graph.remove_edge(edge)
        self._notify_change()
        return True

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        """Get an edge by ID (O(1) lookup)."""
        return self._edge_index.get(edge_id)

    def get_edges_for_vertex(self, vertex_id: str) -> Optional[list[Edge]]:
        """Get all edges connected to a vertex, or None if the vertex is unknown."""
        vertex = self._graph.get_vertex(vertex_id)
        if vertex is None:
            return None
        return self._graph.edges_of(vertex)

    # --- Algorithms ---

    def traverse(
        self,
        start: int = 0,
        order: TraversalOrder = TraversalOrder.BREADTH_FIRST,
        mode: TraversalMode = TraversalMode.UNDIRECTED
    ) -> list[Vertex]:
        """Walk the graph from the vertex at position start."""
        return traverse(self._graph, start, order, mode)

    def distance(self, origin_id: str, destination_id: str) -> Optional[int]:
        """Hop distance between two vertices, or None if either is unknown."""
        origin = self._graph.get_vertex(origin_id)
        destination = self._graph.get_vertex(destination_id)
        if origin is None or destination is None:
            return None
        return hop_distance(self._graph, origin, destination)

    def auto_layout(self, strategy: str = "grid", root: int = 0) -> bool:
        """
        Automatically arrange vertices.

        Strategies:
        - grid: Simple grid layout
        - layered: Columns by hop distance from the root vertex
        """
        if self._graph.vertex_count == 0:
            return False

        apply_layout(self._graph, strategy, root)
        self._notify_change()
        return True

    def validate(self) -> list[ValidationIssue]:
        return validate_graph(self._graph)

    def summarize(self) -> GraphSummary:
        return summarize_graph(self._graph, name=self._name)

    def get_state(self) -> dict:
        """Get the full current state for API responses."""
        return {
            "name": self._name,
            "vertices": [v.model_dump() for v in self._graph.all_vertices()],
            "edges": [e.to_json_dict() for e in self._graph.all_edges()],
            "vertex_count": self._graph.vertex_count,
            "edge_count": self._graph.edge_count,
            "is_dirty": self._dirty,
        }


# Global instance for the application
graph_manager = GraphManager()
