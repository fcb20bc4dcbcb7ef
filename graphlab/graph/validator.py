"""Graph validation with cycle reporting and visualization.

This module inspects a Graph for conditions that undermine its algorithms:
cycles (no complete topological order), negative edge weights (shortest
paths become unreliable), isolated vertices and parallel edges. It also
renders graphs as Mermaid or Graphviz DOT text.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from graphlab.graph.graph import Edge, Graph

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Report containing validation results for a graph.

    Attributes:
        is_valid: Whether the graph passed all validation checks
        errors: List of error messages (critical issues)
        warnings: List of warning messages (potential issues)
        cycles: Detected cycles, each a list of vertices closing on its first
        negative_edges: Edges whose weight is below zero
        isolated_vertices: Vertices with no incoming or outgoing edges
        parallel_edges: (source, target) pairs stored more than once
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cycles: list[list[int]] = field(default_factory=list)
    negative_edges: list["Edge"] = field(default_factory=list)
    isolated_vertices: set[int] = field(default_factory=set)
    parallel_edges: set[tuple[int, int]] = field(default_factory=set)

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def add_warning(self, message: str) -> None:
        """Add a warning message without failing validation."""
        self.warnings.append(message)
        logger.warning("validation_warning", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = []
        lines.append(f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}")
        lines.append(f"Errors: {len(self.errors)}")
        lines.append(f"Warnings: {len(self.warnings)}")
        lines.append(f"Cycles: {len(self.cycles)}")
        lines.append(f"Negative Edges: {len(self.negative_edges)}")
        lines.append(f"Isolated Vertices: {len(self.isolated_vertices)}")
        lines.append(f"Parallel Edges: {len(self.parallel_edges)}")

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        if self.cycles:
            lines.append("\nCycles Detected:")
            for i, cycle in enumerate(self.cycles, 1):
                lines.append(f"  {i}. {' -> '.join(str(v) for v in cycle)}")

        return "\n".join(lines)


class GraphValidator:
    """Validator for graphs with detailed reporting.

    This class provides:
    - Cycle detection with complete path information
    - Negative weight detection
    - Isolated vertex and parallel edge detection
    - Graph visualization generation
    """

    def __init__(self):
        """Initialize the graph validator."""
        self._visited: set[int] = set()
        self._rec_stack: set[int] = set()
        self._path: list[int] = []

    def validate(self, graph: "Graph") -> ValidationReport:
        """Validate a graph and generate a detailed report.

        Args:
            graph: The Graph to validate

        Returns:
            ValidationReport containing all validation results
        """
        logger.info(
            "starting_graph_validation",
            vertex_count=graph.vertex_count,
            edge_count=graph.edge_count,
        )

        report = ValidationReport()

        cycles = self._detect_cycles(graph)
        if cycles:
            report.cycles = cycles
            for cycle in cycles:
                cycle_path = " -> ".join(str(v) for v in cycle)
                report.add_warning(f"Cycle detected (no complete topological order): {cycle_path}")

        negative = [edge for edge in graph.edges() if edge.weight < 0]
        if negative:
            report.negative_edges = negative
            edges_str = ", ".join(str(edge) for edge in negative)
            report.add_error(f"Negative edge weights break shortest paths: {edges_str}")

        isolated = self._find_isolated_vertices(graph)
        if isolated:
            report.isolated_vertices = isolated
            isolated_str = ", ".join(str(v) for v in sorted(isolated))
            report.add_warning(f"Isolated vertices with no edges: {isolated_str}")

        parallel = self._find_parallel_edges(graph)
        if parallel:
            report.parallel_edges = parallel
            pairs_str = ", ".join(f"{s} -> {t}" for s, t in sorted(parallel))
            report.add_warning(f"Parallel edges stored more than once: {pairs_str}")

        logger.info(
            "graph_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
            warning_count=len(report.warnings),
        )

        return report

    def _detect_cycles(self, graph: "Graph") -> list[list[int]]:
        """Detect cycles using DFS, at most one per unvisited root.

        Args:
            graph: The graph to inspect

        Returns:
            List of cycles, each a list of vertices ending where it started
        """
        self._visited = set()
        cycles = []

        for vertex in graph.vertices():
            if vertex not in self._visited:
                self._rec_stack = set()
                self._path = []
                cycle = self._dfs_cycle_detect(vertex, graph)
                if cycle:
                    cycles.append(cycle)

        return cycles

    def _dfs_cycle_detect(self, root: int, graph: "Graph") -> list[int] | None:
        """DFS-based cycle detection that returns the cycle path.

        Uses an explicit stack of neighbor iterators, so long chains do not
        hit the interpreter's recursion limit.

        Args:
            root: Vertex the search starts from
            graph: The graph being inspected

        Returns:
            List representing the cycle path if found, None otherwise
        """
        self._enter(root)
        stack = [iter(graph.neighbors(root))]

        while stack:
            neighbor = next(stack[-1], None)
            if neighbor is None:
                # Backtrack
                stack.pop()
                self._rec_stack.remove(self._path.pop())
            elif neighbor not in self._visited:
                self._enter(neighbor)
                stack.append(iter(graph.neighbors(neighbor)))
            elif neighbor in self._rec_stack:
                cycle_start_idx = self._path.index(neighbor)
                return [*self._path[cycle_start_idx:], neighbor]

        return None

    def _enter(self, vertex: int) -> None:
        self._visited.add(vertex)
        self._rec_stack.add(vertex)
        self._path.append(vertex)

    def _find_isolated_vertices(self, graph: "Graph") -> set[int]:
        """Find vertices that no edge leaves or enters."""
        touched = set()
        for edge in graph.edges():
            touched.add(edge.source)
            touched.add(edge.target)

        isolated = set(graph.vertices()) - touched

        if isolated:
            logger.debug("isolated_vertices_found", count=len(isolated), vertices=sorted(isolated))

        return isolated

    def _find_parallel_edges(self, graph: "Graph") -> set[tuple[int, int]]:
        """Find (source, target) pairs that carry more than one stored edge."""
        counts = Counter((edge.source, edge.target) for edge in graph.edges())
        return {pair for pair, count in counts.items() if count > 1}

    def generate_visualization(
        self,
        graph: "Graph",
        output_format: str = "mermaid",
    ) -> str:
        """Generate a visual representation of the graph.

        Args:
            graph: The Graph to visualize
            output_format: Output format ('mermaid' or 'dot')

        Returns:
            String representation of the graph in the requested format

        Raises:
            ValueError: If an unsupported format is requested
        """
        output_format = output_format.lower().strip()

        if output_format == "mermaid":
            return self._generate_mermaid(graph)
        if output_format == "dot":
            return self._generate_graphviz(graph)
        error_msg = f"Unsupported format: {output_format}. Use 'mermaid' or 'dot'."
        raise ValueError(error_msg)

    def _generate_mermaid(self, graph: "Graph") -> str:
        """Generate a Mermaid flowchart; non-zero weights become edge labels."""
        lines = ["graph LR"]

        if graph.vertex_count == 0:
            lines.append("    Empty[Empty Graph]")
            return "\n".join(lines)

        lines.extend(f"    v{vertex}(({vertex}))" for vertex in graph.vertices())

        for edge in graph.edges():
            if edge.weight:
                lines.append(f"    v{edge.source} -->|{edge.weight}| v{edge.target}")
            else:
                lines.append(f"    v{edge.source} --> v{edge.target}")

        return "\n".join(lines)

    def _generate_graphviz(self, graph: "Graph") -> str:
        """Generate a Graphviz DOT digraph; every edge is labelled with its weight."""
        lines = ["digraph Graph {"]
        lines.append("    rankdir=LR;")
        lines.append("    node [shape=circle];")

        if graph.vertex_count == 0:
            lines.append('    Empty [label="Empty Graph", shape=box];')
        else:
            lines.extend(f"    {vertex};" for vertex in graph.vertices())
            lines.extend(
                f'    {edge.source} -> {edge.target} [label="{edge.weight}"];'
                for edge in graph.edges()
            )

        lines.append("}")
        return "\n".join(lines)
