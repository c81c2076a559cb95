"""
Graph analysis - Structural summaries built on the traversal engine.

Provides analysis functions that can be used by both the backend and the
CLI to understand a graph's structure.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .traversal import TraversalMode, breadth_first

if TYPE_CHECKING:
    from .graph import GraphStore


@dataclass
class ConnectedComponent:
    """A connected component of the graph (edges treated as undirected)."""
    vertex_ids: list[str] = field(default_factory=list)
    edge_count: int = 0

    @property
    def size(self) -> int:
        return len(self.vertex_ids)


@dataclass
class VertexConnectionInfo:
    """Connection information for a single vertex."""
    vertex_id: str
    label: str
    incoming: int = 0   # Edges pointing to this vertex
    outgoing: int = 0   # Edges pointing from this vertex

    @property
    def total(self) -> int:
        return self.incoming + self.outgoing


@dataclass
class GraphSummary:
    """Complete summary of a graph's structure."""
    name: str
    total_vertices: int
    total_edges: int
    vertices_by_shape: dict[str, int]
    connected_components: int
    most_connected_vertices: list[VertexConnectionInfo]
    isolated_count: int
    self_loop_count: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "total_vertices": self.total_vertices,
            "total_edges": self.total_edges,
            "vertices_by_shape": self.vertices_by_shape,
            "connected_components": self.connected_components,
            "most_connected_vertices": [
                {
                    "id": v.vertex_id,
                    "label": v.label,
                    "connections": v.total,
                    "incoming": v.incoming,
                    "outgoing": v.outgoing
                }
                for v in self.most_connected_vertices
            ],
            "isolated_count": self.isolated_count,
            "self_loop_count": self.self_loop_count
        }


def find_connected_components(graph: "GraphStore") -> list[ConnectedComponent]:
    """
    Find all connected components using undirected breadth-first walks.

    Components are listed in the order of their first vertex.

    Args:
        graph: The graph to analyze

    Returns:
        List of ConnectedComponent objects
    """
    visited: set[str] = set()
    components: list[ConnectedComponent] = []

    for position, vertex in enumerate(graph.all_vertices()):
        if vertex.id in visited:
            continue

        members = breadth_first(graph, position, TraversalMode.UNDIRECTED)
        member_ids = [v.id for v in members]
        visited.update(member_ids)

        # Every edge of a member lies inside the component
        edges = {edge for member in members for edge in graph.edges_of(member)}
        components.append(ConnectedComponent(
            vertex_ids=member_ids,
            edge_count=len(edges)
        ))

    return components


def calculate_vertex_connections(graph: "GraphStore") -> dict[str, VertexConnectionInfo]:
    """
    Calculate connection counts for all vertices.

    A self-loop counts as both incoming and outgoing.

    Args:
        graph: The graph to analyze

    Returns:
        Dictionary mapping vertex_id to VertexConnectionInfo
    """
    connections: dict[str, VertexConnectionInfo] = {}
    for vertex in graph.all_vertices():
        connections[vertex.id] = VertexConnectionInfo(
            vertex_id=vertex.id,
            label=vertex.label
        )

    for edge in graph.all_edges():
        connections[edge.source].outgoing += 1
        connections[edge.target].incoming += 1

    return connections


def summarize_graph(graph: "GraphStore", name: str = "Untitled Graph", top_n: int = 5) -> GraphSummary:
    """
    Generate a comprehensive summary of a graph.

    Args:
        graph: The graph to summarize
        name: Display name of the graph
        top_n: Number of top connected vertices to include

    Returns:
        GraphSummary object with all analysis results
    """
    shape_counts: dict[str, int] = defaultdict(int)
    for vertex in graph.all_vertices():
        shape_counts[vertex.shape] += 1

    components = find_connected_components(graph)
    connections = calculate_vertex_connections(graph)

    sorted_by_connections = sorted(
        connections.values(),
        key=lambda x: x.total,
        reverse=True
    )
    most_connected = [v for v in sorted_by_connections[:top_n] if v.total > 0]

    return GraphSummary(
        name=name,
        total_vertices=graph.vertex_count,
        total_edges=graph.edge_count,
        vertices_by_shape=dict(shape_counts),
        connected_components=len(components),
        most_connected_vertices=most_connected,
        isolated_count=sum(1 for v in connections.values() if v.total == 0),
        self_loop_count=sum(1 for e in graph.all_edges() if e.is_loop)
    )
