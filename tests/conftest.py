"""
Pytest configuration and fixtures for diagram-graph tests.
"""

import pytest

from diagram_core.graph import GraphStore
from diagram_core.models import Edge, Vertex


def make_vertices(*labels: str) -> list[Vertex]:
    """Build one vertex per label, using the label as ID."""
    return [Vertex(id=label, label=label) for label in labels]


@pytest.fixture
def triangle() -> tuple[GraphStore, list[Vertex], list[Edge]]:
    """V0, V1, V2 with edges (V0,V1), (V1,V2), (V0,V2)."""
    vertices = make_vertices("V0", "V1", "V2")
    v0, v1, v2 = vertices
    edges = [Edge.between(v0, v1), Edge.between(v1, v2), Edge.between(v0, v2)]
    return GraphStore(vertices, edges), vertices, edges


@pytest.fixture
def chain() -> tuple[GraphStore, list[Vertex]]:
    """A -> B -> C."""
    vertices = make_vertices("A", "B", "C")
    a, b, c = vertices
    graph = GraphStore(vertices, [Edge.between(a, b), Edge.between(b, c)])
    return graph, vertices


@pytest.fixture
def branching() -> tuple[GraphStore, list[Vertex]]:
    """
    A -> B, A -> C, B -> D.

    Rows: A [AB, AC], B [AB, BD], C [AC], D [BD].
    """
    vertices = make_vertices("A", "B", "C", "D")
    a, b, c, d = vertices
    edges = [Edge.between(a, b), Edge.between(a, c), Edge.between(b, d)]
    return GraphStore(vertices, edges), vertices


@pytest.fixture(name="make_vertices")
def make_vertices_fixture():
    """Factory fixture for labelled vertices."""
    return make_vertices
