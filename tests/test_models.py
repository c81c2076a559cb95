"""
Unit tests for vertex and edge models.
"""

import pytest
from pydantic import ValidationError

from diagram_core.models import (
    CreateEdgeRequest,
    CreateVertexRequest,
    Edge,
    HEIGHT_MAX,
    UpdateVertexRequest,
    Vertex,
    VertexShape,
    WIDTH_MIN,
)


class TestVertex:
    def test_defaults(self):
        vertex = Vertex()

        assert vertex.id.startswith("v")
        assert vertex.shape == VertexShape.ELLIPSE.value
        assert (vertex.x, vertex.y, vertex.width, vertex.height) == (1, 1, 60, 40)

    def test_equality_is_by_id(self):
        assert Vertex(id="a", x=10) == Vertex(id="a", x=99)
        assert Vertex(id="a") != Vertex(id="b")
        assert len({Vertex(id="a"), Vertex(id="a", label="other")}) == 1

    def test_non_positive_coordinates_fall_back(self):
        vertex = Vertex(x=0, y=-20)
        assert (vertex.x, vertex.y) == (1, 1)

    def test_size_is_clamped(self):
        vertex = Vertex(width=1, height=1000)
        assert vertex.width == WIDTH_MIN
        assert vertex.height == HEIGHT_MAX

    def test_assignment_is_validated(self):
        vertex = Vertex()

        vertex.x = -5
        vertex.width = 500

        assert vertex.x == 1
        assert vertex.width == 300

    def test_unknown_shape_is_rejected(self):
        with pytest.raises(ValidationError, match="Unknown shape"):
            Vertex(shape="hexagon")

    def test_shape_assignment_is_checked(self):
        vertex = Vertex()

        vertex.shape = "rectangle_top_line"
        with pytest.raises(ValidationError):
            vertex.shape = "hexagon"

        assert vertex.shape == "rectangle_top_line"

    def test_center_and_bounds(self):
        vertex = Vertex(x=10, y=20, width=60, height=40)

        assert vertex.center() == (40, 40)
        assert vertex.bounds() == (10, 20, 70, 60)


class TestEdge:
    def test_equality_is_structural(self):
        assert Edge(source="a", target="b", label="one") == Edge(source="a", target="b", label="two")
        assert Edge(source="a", target="b") != Edge(source="b", target="a")

    def test_accepts_vertices_as_endpoints(self):
        a, b = Vertex(id="a"), Vertex(id="b")

        assert Edge(source=a, target=b).key == ("a", "b")
        assert Edge.between(a, b).key == ("a", "b")

    def test_legacy_from_to_fields(self):
        edge = Edge.model_validate({"from": "a", "to": "b"})
        assert edge.key == ("a", "b")

    def test_missing_endpoint_field_is_invalid(self):
        with pytest.raises(ValidationError):
            Edge(source="a")

    def test_loop(self):
        assert Edge(source="a", target="a").is_loop
        assert not Edge(source="a", target="b").is_loop

    def test_other_endpoint(self):
        edge = Edge(source="a", target="b")

        assert edge.other_endpoint("a") == "b"
        assert edge.other_endpoint("b") == "a"
        assert Edge(source="a", target="a").other_endpoint("a") == "a"

    def test_to_json_dict(self):
        edge = Edge(id="e1", source="a", target="b", label="flows")

        assert edge.to_json_dict() == {
            "id": "e1",
            "source": "a",
            "target": "b",
            "label": "flows",
            "color": "#000000",
        }


class TestVertexRequests:
    def test_create_rejects_unknown_shape(self):
        with pytest.raises(ValidationError):
            CreateVertexRequest(shape="hexagon")

    def test_update_allows_missing_shape(self):
        assert UpdateVertexRequest().shape is None
        with pytest.raises(ValidationError):
            UpdateVertexRequest(shape="hexagon")


class TestCreateEdgeRequest:
    def test_legacy_fields(self):
        request = CreateEdgeRequest.model_validate({"from": "a", "to": "b"})
        assert (request.source, request.target) == ("a", "b")
