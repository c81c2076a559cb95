"""
Layout algorithms for graph vertices.

Provides layout strategies that can be applied to a graph:
- Grid: Simple grid arrangement in insertion order
- Layered: Columns by hop distance from a root vertex

All layout functions move vertices in-place and return the vertex list.
"""

from collections import defaultdict
from typing import TYPE_CHECKING

from .distance import distance
from .traversal import TraversalMode, breadth_first

if TYPE_CHECKING:
    from .graph import GraphStore
    from .models import Vertex


# Default layout parameters
DEFAULT_SPACING_X = 120
DEFAULT_SPACING_Y = 90
DEFAULT_START_X = 20
DEFAULT_START_Y = 20

LAYOUT_STRATEGIES = ("grid", "layered")


def grid_layout(
    graph: "GraphStore",
    spacing_x: float = DEFAULT_SPACING_X,
    spacing_y: float = DEFAULT_SPACING_Y,
    start_x: float = DEFAULT_START_X,
    start_y: float = DEFAULT_START_Y,
    columns: int | None = None
) -> list["Vertex"]:
    """
    Arrange vertices in a grid pattern.

    Args:
        graph: Graph whose vertices are arranged
        spacing_x: Horizontal spacing between vertices
        spacing_y: Vertical spacing between vertices
        start_x: X coordinate of first vertex
        start_y: Y coordinate of first vertex
        columns: Number of columns (auto-calculated if None)

    Returns:
        The graph's vertices (modified in-place)
    """
    vertices = graph.all_vertices()
    if not vertices:
        return vertices

    # Auto-calculate columns based on vertex count
    if columns is None:
        columns = max(3, int(len(vertices) ** 0.5) + 1)

    for i, vertex in enumerate(vertices):
        row = i // columns
        col = i % columns
        vertex.x = start_x + col * spacing_x
        vertex.y = start_y + row * spacing_y

    return vertices


def layered_layout(
    graph: "GraphStore",
    root_index: int = 0,
    spacing_x: float = DEFAULT_SPACING_X,
    spacing_y: float = DEFAULT_SPACING_Y,
    start_x: float = DEFAULT_START_X,
    start_y: float = DEFAULT_START_Y
) -> list["Vertex"]:
    """
    Arrange vertices in columns by hop distance from a root vertex.

    Vertices reached from the root are placed in discovery order, one
    column per hop. Vertices in other components go in one extra column
    after the last one.

    Args:
        graph: Graph whose vertices are arranged
        root_index: Position of the root vertex
        spacing_x: Horizontal spacing between columns
        spacing_y: Vertical spacing within a column
        start_x: X coordinate of the root column
        start_y: Y coordinate of the first row

    Returns:
        The graph's vertices (modified in-place)

    Raises:
        ValueError: root_index does not address a vertex
    """
    reached = breadth_first(graph, root_index, TraversalMode.UNDIRECTED)
    if not reached:
        raise ValueError(f"No vertex at position {root_index}")

    root = reached[0]
    levels: dict[str, int] = {v.id: distance(graph, root, v) for v in reached}

    trailing = max(levels.values()) + 1
    for vertex in graph.all_vertices():
        if vertex.id not in levels:
            levels[vertex.id] = trailing

    level_counts: dict[int, int] = defaultdict(int)
    reached_ids = {v.id for v in reached}
    ordered = reached + [v for v in graph.all_vertices() if v.id not in reached_ids]
    for vertex in ordered:
        level = levels[vertex.id]
        idx = level_counts[level]
        level_counts[level] += 1
        vertex.x = start_x + level * spacing_x
        vertex.y = start_y + idx * spacing_y

    return graph.all_vertices()


def apply_layout(graph: "GraphStore", strategy: str = "grid", root_index: int = 0) -> list["Vertex"]:
    """Run a layout strategy by name."""
    if strategy == "layered":
        return layered_layout(graph, root_index)
    if strategy == "grid":
        return grid_layout(graph)
    raise ValueError(f"Unknown layout strategy: {strategy}")
