"""
Unit tests for breadth-first and depth-first traversal in both oriented and
undirected modes.
"""

import pytest

from diagram_core.graph import GraphStore
from diagram_core.models import Edge
from diagram_core.traversal import (
    TraversalMode,
    TraversalOrder,
    breadth_first,
    depth_first,
    reachable_ids,
    traverse,
)

ORIENTED = TraversalMode.ORIENTED
UNDIRECTED = TraversalMode.UNDIRECTED


def ids(vertices):
    return [v.id for v in vertices]


def reachable_closure(graph: GraphStore, start_id: str, mode: TraversalMode) -> set[str]:
    """Reachable set computed by fixed-point iteration over all edges."""
    reached = {start_id}
    changed = True
    while changed:
        changed = False
        for edge in graph.all_edges():
            pairs = [(edge.source, edge.target)]
            if mode == UNDIRECTED:
                pairs.append((edge.target, edge.source))
            for frm, to in pairs:
                if frm in reached and to not in reached:
                    reached.add(to)
                    changed = True
    return reached


# =============================================================================
# Breadth-first
# =============================================================================


class TestBreadthFirst:
    def test_oriented_chain_from_head(self, chain):
        graph, _ = chain
        assert ids(breadth_first(graph, 0, ORIENTED)) == ["A", "B", "C"]

    def test_oriented_chain_from_tail(self, chain):
        graph, _ = chain
        assert ids(breadth_first(graph, 2, ORIENTED)) == ["C"]

    def test_undirected_chain_from_tail(self, chain):
        graph, _ = chain
        assert ids(breadth_first(graph, 2, UNDIRECTED)) == ["C", "B", "A"]

    @pytest.mark.parametrize("start", [0, 1, 2])
    def test_undirected_triangle_visits_all_once(self, triangle, start):
        graph, vertices, _ = triangle

        result = breadth_first(graph, start, UNDIRECTED)

        assert result[0] == vertices[start]
        assert sorted(ids(result)) == ["V0", "V1", "V2"]

    def test_levels_come_before_deeper_vertices(self, branching):
        graph, _ = branching
        assert ids(breadth_first(graph, 0, UNDIRECTED)) == ["A", "B", "C", "D"]

    def test_default_mode_is_undirected(self, chain):
        graph, _ = chain
        assert ids(breadth_first(graph, 2)) == ["C", "B", "A"]


# =============================================================================
# Depth-first
# =============================================================================


class TestDepthFirst:
    def test_descends_before_visiting_siblings(self, make_vertices):
        a, b, c, d, e = make_vertices("A", "B", "C", "D", "E")
        graph = GraphStore(
            [a, b, c, d, e],
            [Edge.between(a, b), Edge.between(a, c), Edge.between(b, d), Edge.between(c, e)]
        )

        assert ids(depth_first(graph, 0, UNDIRECTED)) == ["A", "B", "D", "C", "E"]
        assert ids(breadth_first(graph, 0, UNDIRECTED)) == ["A", "B", "C", "D", "E"]

    def test_differs_from_breadth_first(self, branching):
        graph, _ = branching

        assert ids(depth_first(graph, 0, UNDIRECTED)) == ["A", "B", "D", "C"]
        assert ids(breadth_first(graph, 0, UNDIRECTED)) == ["A", "B", "C", "D"]

    def test_oriented_branching(self, branching):
        graph, _ = branching
        assert ids(depth_first(graph, 0, ORIENTED)) == ["A", "B", "D", "C"]

    def test_visits_every_neighbour_of_a_hub(self, make_vertices):
        hub, x, y, z = make_vertices("S", "x", "y", "z")
        graph = GraphStore(
            [hub, x, y, z],
            [Edge.between(hub, x), Edge.between(hub, y), Edge.between(hub, z)]
        )

        assert ids(depth_first(graph, 0, ORIENTED)) == ["S", "x", "y", "z"]
        # x descends into S, which then resumes its row for y and z
        assert ids(depth_first(graph, 1, UNDIRECTED)) == ["x", "S", "y", "z"]

    def test_deep_branch_is_finished_before_backtracking(self, make_vertices):
        # A-B-C-D path plus a sibling E hanging off A
        a, b, c, d, e = make_vertices("A", "B", "C", "D", "E")
        graph = GraphStore(
            [a, b, c, d, e],
            [Edge.between(a, b), Edge.between(a, e), Edge.between(b, c), Edge.between(c, d)]
        )

        assert ids(depth_first(graph, 0, UNDIRECTED)) == ["A", "B", "C", "D", "E"]
        assert ids(breadth_first(graph, 0, UNDIRECTED)) == ["A", "B", "E", "C", "D"]

    def test_oriented_from_sink(self, branching):
        graph, _ = branching
        assert ids(depth_first(graph, 3, ORIENTED)) == ["D"]

    def test_undirected_from_leaf(self, branching):
        graph, _ = branching
        assert ids(depth_first(graph, 3, UNDIRECTED)) == ["D", "B", "A", "C"]

    def test_oriented_chain(self, chain):
        graph, _ = chain
        assert ids(depth_first(graph, 0, ORIENTED)) == ["A", "B", "C"]
        assert ids(depth_first(graph, 1, ORIENTED)) == ["B", "C"]


# =============================================================================
# Shared properties
# =============================================================================


WALKS = [breadth_first, depth_first]
MODES = [ORIENTED, UNDIRECTED]


class TestTraversalProperties:
    @pytest.mark.parametrize("walk", WALKS)
    @pytest.mark.parametrize("mode", MODES)
    @pytest.mark.parametrize("start", [-1, 4, 100])
    def test_bad_start_index_returns_empty(self, branching, walk, mode, start):
        graph, _ = branching
        assert walk(graph, start, mode) == []

    @pytest.mark.parametrize("walk", WALKS)
    @pytest.mark.parametrize("mode", MODES)
    def test_empty_graph(self, walk, mode):
        assert walk(GraphStore(), 0, mode) == []

    @pytest.mark.parametrize("walk", WALKS)
    @pytest.mark.parametrize("mode", MODES)
    def test_result_is_exactly_the_reachable_set(self, make_vertices, walk, mode):
        a, b, c, d, e, f = make_vertices("A", "B", "C", "D", "E", "F")
        graph = GraphStore(
            [a, b, c, d, e, f],
            [
                Edge.between(a, b),
                Edge.between(c, a),
                Edge.between(b, d),
                Edge.between(d, b),
                Edge.between(d, e),
                Edge.between(e, e),
            ]
        )

        for start, vertex in enumerate(graph.all_vertices()):
            result = ids(walk(graph, start, mode))

            assert result[0] == vertex.id
            assert len(result) == len(set(result))
            assert set(result) == reachable_closure(graph, vertex.id, mode)

    @pytest.mark.parametrize("walk", WALKS)
    def test_repeat_calls_give_same_result(self, branching, walk):
        graph, _ = branching
        assert walk(graph, 0, UNDIRECTED) == walk(graph, 0, UNDIRECTED)

    @pytest.mark.parametrize("walk", WALKS)
    def test_walk_leaves_vertices_untouched(self, branching, walk):
        graph, vertices = branching
        before = [v.model_dump() for v in vertices]

        walk(graph, 0, UNDIRECTED)

        assert [v.model_dump() for v in vertices] == before

    @pytest.mark.parametrize("walk", WALKS)
    def test_self_loop_is_ignored(self, make_vertices, walk):
        a, b = make_vertices("A", "B")
        graph = GraphStore([a, b], [Edge.between(a, a), Edge.between(a, b)])

        assert ids(walk(graph, 0, ORIENTED)) == ["A", "B"]


class TestTraverse:
    def test_dispatches_on_order(self, branching):
        graph, _ = branching

        assert traverse(graph, 0, TraversalOrder.BREADTH_FIRST) == breadth_first(graph, 0)
        assert traverse(graph, 0, TraversalOrder.DEPTH_FIRST) == depth_first(graph, 0)

    def test_accepts_string_values(self, chain):
        graph, _ = chain
        assert ids(traverse(graph, 2, TraversalOrder("depth_first"), TraversalMode("oriented"))) == ["C"]

    def test_reachable_ids(self, chain):
        graph, _ = chain

        assert reachable_ids(graph, 1, ORIENTED) == {"B", "C"}
        assert reachable_ids(graph, 1, UNDIRECTED) == {"A", "B", "C"}
