"""
Graph validation - Check a graph for structural issues.

Provides validation that can be used by both the backend and the CLI
to review a diagram before it is laid out or shared.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .graph import GraphStore


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Invalid state, must be fixed
    WARNING = "warning"  # Potential problem, should review
    INFO = "info"        # Informational, may be intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in a graph."""
    severity: IssueSeverity
    message: str
    vertex_id: str | None = None
    edge_id: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.vertex_id:
            result["vertex_id"] = self.vertex_id
        if self.edge_id:
            result["edge_id"] = self.edge_id
        return result


def validate_graph(graph: "GraphStore") -> list[ValidationIssue]:
    """
    Validate a graph and return a list of issues.

    Checks for:
    - Empty graph - INFO
    - Isolated vertices (no edges) - WARNING
    - Unlabelled vertices - WARNING
    - Self-loops - INFO
    - Edge counter out of step with the stored edges - ERROR

    Duplicate edges and dangling endpoints are rejected by the store
    itself, so they are not checked here.

    Args:
        graph: The graph to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    vertices = graph.all_vertices()
    if not vertices:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Graph has no vertices"
        ))
        return issues

    # Isolated vertices
    isolated = [v for v in vertices if graph.edge_count_of(v) == 0]
    if isolated:
        labels = ", ".join(f"{v.label or '?'} ({v.id})" for v in isolated)
        issues.append(ValidationIssue(
            severity=IssueSeverity.WARNING,
            message=f"Isolated vertices (no edges): {labels}"
        ))

    for vertex in vertices:
        if not vertex.label.strip():
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Vertex has an empty label",
                vertex_id=vertex.id
            ))

    edges = graph.all_edges()
    for edge in edges:
        if edge.is_loop:
            issues.append(ValidationIssue(
                severity=IssueSeverity.INFO,
                message="Self-loop (vertex connects to itself)",
                vertex_id=edge.source,
                edge_id=edge.id
            ))

    if len(edges) != graph.edge_count:
        issues.append(ValidationIssue(
            severity=IssueSeverity.ERROR,
            message=f"Edge counter is {graph.edge_count} but {len(edges)} edges are stored"
        ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(issues),
        "errors": len([i for i in issues if i.severity == IssueSeverity.ERROR]),
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": len([i for i in issues if i.severity == IssueSeverity.ERROR]) == 0
    }
