"""
Diagram Graph Core - Graph model, traversal and distance for the diagram editor.

This module provides the graph the editor is built on, together with the
validation, analysis and layout helpers used by the backend and the CLI.
"""

from .models import (
    # Enums
    VertexShape,
    # Core models
    Vertex,
    Edge,
    # Request models (for API)
    CreateVertexRequest,
    UpdateVertexRequest,
    CreateEdgeRequest,
    LayoutRequest,
)

from .errors import GraphError, NullInputError, MissingEndpointError
from .graph import GraphStore
from .traversal import TraversalOrder, TraversalMode, breadth_first, depth_first, traverse
from .distance import distance, UNREACHABLE
from .validation import validate_graph, ValidationIssue, IssueSeverity
from .analysis import summarize_graph, find_connected_components
from .layout import grid_layout, layered_layout, apply_layout

__all__ = [
    # Enums
    "VertexShape",
    "TraversalOrder",
    "TraversalMode",
    # Models
    "Vertex",
    "Edge",
    # Request models
    "CreateVertexRequest",
    "UpdateVertexRequest",
    "CreateEdgeRequest",
    "LayoutRequest",
    # Errors
    "GraphError",
    "NullInputError",
    "MissingEndpointError",
    # Graph
    "GraphStore",
    "breadth_first",
    "depth_first",
    "traverse",
    "distance",
    "UNREACHABLE",
    # Validation
    "validate_graph",
    "ValidationIssue",
    "IssueSeverity",
    # Analysis
    "summarize_graph",
    "find_connected_components",
    # Layout
    "grid_layout",
    "layered_layout",
    "apply_layout",
]
