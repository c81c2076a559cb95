"""
Hop distance between two vertices.

The distance is computed from a breadth-first discovery order rather than
by assigning costs at discovery time: vertices are walked in discovery
order and each one costs one hop more than the first vertex it is
adjacent to, searching forward from the last anchor.

A return value of 0 means either "same vertex" or "unreachable".
"""

import logging
from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .graph import GraphStore
    from .models import Vertex

logger = logging.getLogger(__name__)

UNREACHABLE = 0
INFINITE_COST = 1_000_000


def discovery_order(
    graph: "GraphStore",
    origin: "Vertex",
    destination: "Vertex"
) -> list["Vertex"]:
    """
    Undirected breadth-first discovery order from origin, cut at destination.

    Returns:
        Vertices in discovery order, ending with destination if it was
        reached; empty if origin is not in the graph
    """
    if not graph.has_vertex(origin):
        return []

    visited: set[str] = {origin.id}
    order: list["Vertex"] = [origin]
    if origin == destination:
        return order

    queue = deque([origin])
    while queue:
        current = queue.popleft()
        for neighbour in graph.adjacent_vertices(current):
            if neighbour.id in visited:
                continue
            visited.add(neighbour.id)
            order.append(neighbour)
            if neighbour == destination:
                return order
            queue.append(neighbour)

    return order


def distance(graph: "GraphStore", origin: "Vertex", destination: "Vertex") -> int:
    """
    Number of hops between origin and destination.

    Args:
        graph: The graph to search
        origin: Vertex to measure from
        destination: Vertex to measure to

    Returns:
        Hop count, or UNREACHABLE (0) when destination can't be reached or
        either vertex is not in the graph
    """
    if not (graph.has_vertex(origin) and graph.has_vertex(destination)):
        logger.debug("Distance requested for a vertex outside the graph")
        return UNREACHABLE

    order = discovery_order(graph, origin, destination)
    if order[-1] != destination:
        return UNREACHABLE

    positions = {vertex.id: i for i, vertex in enumerate(graph.all_vertices())}
    cost = [INFINITE_COST] * graph.vertex_count
    cost[positions[order[0].id]] = 0

    anchor = 0
    candidate = 1
    while candidate < len(order):
        if graph.is_adjacent(order[candidate], order[anchor]):
            cost[positions[order[candidate].id]] = cost[positions[order[anchor].id]] + 1
            candidate += 1
        else:
            anchor += 1

    return cost[positions[destination.id]]
