"""
Graph traversal - Breadth-first and depth-first walks over a GraphStore.

Each walk comes in two edge interpretations:
- Oriented: edges are only followed from source to target
- Undirected: edges are followed in either direction

All functions are stateless. Visited vertices are tracked in a set local
to the call, so walks never write to the vertices or edges themselves.
The result is a fully built list in discovery order whose first element
is the start vertex; an invalid start index yields an empty list.
"""

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .graph import GraphStore
    from .models import Edge, Vertex


class TraversalOrder(str, Enum):
    """Order in which vertices are discovered."""
    BREADTH_FIRST = "breadth_first"
    DEPTH_FIRST = "depth_first"


class TraversalMode(str, Enum):
    """How edges are interpreted during a walk."""
    ORIENTED = "oriented"
    UNDIRECTED = "undirected"


def _next_vertex_id(edge: "Edge", current_id: str, mode: TraversalMode) -> Optional[str]:
    """Get the vertex an edge leads to from current_id, or None if it can't be followed."""
    if mode == TraversalMode.ORIENTED:
        return edge.target if edge.source == current_id else None
    return edge.other_endpoint(current_id)


def breadth_first(
    graph: "GraphStore",
    start_index: int,
    mode: TraversalMode = TraversalMode.UNDIRECTED
) -> list["Vertex"]:
    """
    Walk the graph breadth-first from the vertex at start_index.

    Args:
        graph: The graph to walk
        start_index: Position of the start vertex
        mode: Oriented or undirected edge interpretation

    Returns:
        Vertices in discovery order, or an empty list for a bad start index
    """
    start = graph.vertex_at(start_index)
    if start is None:
        return []

    visited: set[str] = {start.id}
    order: list["Vertex"] = [start]
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for edge in graph.edges_of(current):
            next_id = _next_vertex_id(edge, current.id, mode)
            if next_id is None or next_id in visited:
                continue
            visited.add(next_id)
            vertex = graph.get_vertex(next_id)
            order.append(vertex)
            queue.append(vertex)

    return order


def depth_first(
    graph: "GraphStore",
    start_index: int,
    mode: TraversalMode = TraversalMode.UNDIRECTED
) -> list["Vertex"]:
    """
    Walk the graph depth-first from the vertex at start_index.

    The start vertex is pushed twice, so its row is scanned once more
    after everything else has been popped. A popped vertex's row is
    scanned until the first unvisited neighbour; that neighbour is marked
    and pushed on top of the vertex, and is explored before any of its
    siblings. The vertex resumes its scan when the branch is exhausted.

    Args:
        graph: The graph to walk
        start_index: Position of the start vertex
        mode: Oriented or undirected edge interpretation

    Returns:
        Vertices in discovery order, or an empty list for a bad start index
    """
    start = graph.vertex_at(start_index)
    if start is None:
        return []

    visited: set[str] = {start.id}
    order: list["Vertex"] = [start]
    stack: list["Vertex"] = [start, start]

    while stack:
        current = stack.pop()
        for edge in graph.edges_of(current):
            next_id = _next_vertex_id(edge, current.id, mode)
            if next_id is None or next_id in visited:
                continue
            visited.add(next_id)
            vertex = graph.get_vertex(next_id)
            order.append(vertex)
            stack.append(current)
            stack.append(vertex)
            break

    return order


def traverse(
    graph: "GraphStore",
    start_index: int,
    order: TraversalOrder = TraversalOrder.BREADTH_FIRST,
    mode: TraversalMode = TraversalMode.UNDIRECTED
) -> list["Vertex"]:
    """Walk the graph in the given order and mode."""
    if order == TraversalOrder.DEPTH_FIRST:
        return depth_first(graph, start_index, mode)
    return breadth_first(graph, start_index, mode)


def reachable_ids(
    graph: "GraphStore",
    start_index: int,
    mode: TraversalMode = TraversalMode.UNDIRECTED
) -> set[str]:
    """IDs of every vertex reachable from the vertex at start_index."""
    return {vertex.id for vertex in breadth_first(graph, start_index, mode)}
