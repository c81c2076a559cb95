"""
Core data models for the diagram graph.

These models define the components the graph is built from:
- Vertices with visual properties owned by the editor and layout code
- Edges connecting vertices (using source/target naming convention)

Identity Convention:
- Two vertices are equal when their `id` is equal, whatever their geometry
- Two edges are equal when they connect the same source to the same target;
  the edge `id` is only a handle for the API
- For backward compatibility, `from`/`to` are accepted on input and converted
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
import uuid


# Geometry limits for vertices
COORD_DEFAULT = 1
WIDTH_DEFAULT = 60
WIDTH_MIN = 5
WIDTH_MAX = 300
HEIGHT_DEFAULT = 40
HEIGHT_MIN = 5
HEIGHT_MAX = 300


class VertexShape(str, Enum):
    """Visual shapes for vertices on the canvas."""
    ELLIPSE = "ellipse"
    RECTANGLE = "rectangle"
    RECTANGLE_TOP_LINE = "rectangle_top_line"  # Rectangle with a header line


def generate_vertex_id() -> str:
    """Generate a unique vertex ID."""
    return f"v{uuid.uuid4().hex[:8]}"


def generate_edge_id() -> str:
    """Generate a unique edge ID."""
    return f"e{uuid.uuid4().hex[:8]}"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


SHAPES = {shape.value for shape in VertexShape}


def _check_shape(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in SHAPES:
        raise ValueError(f"Unknown shape '{value}', expected one of {sorted(SHAPES)}")
    return value


class Vertex(BaseModel):
    """A vertex in the graph."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_vertex_id)
    label: str = ""
    shape: str = VertexShape.ELLIPSE.value
    color: str = "#c0c0c0"
    x: float = COORD_DEFAULT
    y: float = COORD_DEFAULT
    width: float = WIDTH_DEFAULT
    height: float = HEIGHT_DEFAULT

    @field_validator("shape")
    @classmethod
    def known_shape(cls, value: str) -> str:
        return _check_shape(value)

    @field_validator("x", "y")
    @classmethod
    def positive_coordinate(cls, value: float) -> float:
        """Coordinates must be positive; anything else falls back to the origin."""
        return value if value > 0 else COORD_DEFAULT

    @field_validator("width")
    @classmethod
    def clamp_width(cls, value: float) -> float:
        return _clamp(value, WIDTH_MIN, WIDTH_MAX)

    @field_validator("height")
    @classmethod
    def clamp_height(cls, value: float) -> float:
        return _clamp(value, HEIGHT_MIN, HEIGHT_MAX)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def center(self) -> tuple[float, float]:
        """Get the center point of the vertex."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def bounds(self) -> tuple[float, float, float, float]:
        """Get the bounding box (x, y, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class Edge(BaseModel):
    """
    An edge connecting two vertices.

    Uses `source` and `target` (vertex IDs) as canonical field names.
    Accepts `from`/`to` on input for backward compatibility, and Vertex
    objects in place of their IDs.
    """
    id: str = Field(default_factory=generate_edge_id)
    source: str  # Origin vertex ID
    target: str  # Destination vertex ID
    label: str = ""
    color: str = "#000000"

    @model_validator(mode='before')
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert legacy 'from'/'to' fields and Vertex endpoints to IDs."""
        if isinstance(data, dict):
            data = dict(data)
            # Handle 'from' -> 'source' (from is a Python keyword)
            if 'from' in data and 'source' not in data:
                data['source'] = data.pop('from')
            if 'to' in data and 'target' not in data:
                data['target'] = data.pop('to')
            for key in ('source', 'target'):
                if isinstance(data.get(key), Vertex):
                    data[key] = data[key].id
        return data

    @classmethod
    def between(cls, origin: Vertex, destination: Vertex, **kwargs) -> "Edge":
        """Build an edge from two vertex objects."""
        return cls(source=origin.id, target=destination.id, **kwargs)

    @property
    def key(self) -> tuple[str, str]:
        """The structural identity of the edge."""
        return (self.source, self.target)

    @property
    def is_loop(self) -> bool:
        """True for a self-loop (origin and destination are the same vertex)."""
        return self.source == self.target

    def touches(self, vertex_id: str) -> bool:
        return vertex_id in (self.source, self.target)

    def other_endpoint(self, vertex_id: str) -> str:
        """Get the endpoint opposite to vertex_id (the vertex itself for a loop)."""
        return self.target if self.source == vertex_id else self.source

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "color": self.color,
        }


# --- API Request/Response Models ---

class CreateVertexRequest(BaseModel):
    """Request to create a new vertex."""
    label: str = ""
    shape: str = VertexShape.ELLIPSE.value
    color: str = "#c0c0c0"
    x: float = COORD_DEFAULT
    y: float = COORD_DEFAULT
    width: float = WIDTH_DEFAULT
    height: float = HEIGHT_DEFAULT

    @field_validator("shape")
    @classmethod
    def known_shape(cls, value: Optional[str]) -> Optional[str]:
        return _check_shape(value)


class UpdateVertexRequest(BaseModel):
    """Request to update an existing vertex (partial update)."""
    label: Optional[str] = None
    shape: Optional[str] = None
    color: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    @field_validator("shape")
    @classmethod
    def known_shape(cls, value: Optional[str]) -> Optional[str]:
        return _check_shape(value)


class CreateEdgeRequest(BaseModel):
    """Request to create a new edge."""
    source: str = ""
    target: str = ""
    label: str = ""
    color: str = "#000000"

    @model_validator(mode='before')
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert legacy 'from'/'to' fields to 'source'/'target'."""
        if isinstance(data, dict):
            if 'from' in data and 'source' not in data:
                data['source'] = data.pop('from')
            if 'to' in data and 'target' not in data:
                data['target'] = data.pop('to')
        return data


class LayoutRequest(BaseModel):
    """Request to re-arrange the graph."""
    strategy: str = "grid"
    root: int = 0  # Start vertex index for traversal-driven layouts
