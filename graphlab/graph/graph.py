"""Weighted directed graph over densely numbered integer vertices.

This module provides the Graph class, an adjacency-list graph whose vertex
set ``0 .. vertex_count-1`` is fixed at construction. Edges are only ever
added. On top of the structure it offers adjacency queries, depth-first
reachability and path reconstruction, topological ordering and Dijkstra
shortest paths.
"""

import heapq
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from graphlab.graph.traversal import DepthFirstIterator, TopologicalIterator

logger = structlog.get_logger(__name__)


class GraphError(Exception):
    """Base exception for all graph operation failures."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the failure
        """
        super().__init__(message)
        self.message = message


class InvalidVertexError(GraphError):
    """Exception raised when a vertex id lies outside ``[0, vertex_count)``."""

    def __init__(self, vertex: Any, vertex_count: int):
        self.vertex = vertex
        self.vertex_count = vertex_count
        super().__init__(f"Invalid vertex {vertex!r}: expected an int in [0, {vertex_count})")


class NoPathFoundError(GraphError):
    """Exception raised when the target vertex is unreachable from the start."""

    def __init__(self, start: int, stop: int):
        self.start = start
        self.stop = stop
        super().__init__(f"No path from {start} to {stop}")


class CycleDetectedError(GraphError):
    """Exception raised when a complete topological order is impossible.

    Vertices on a cycle, or downstream of one, never reach in-degree zero and
    therefore never leave the topological iterator.
    """


class NegativeWeightError(GraphError):
    """Exception raised when a shortest-path query meets a negative edge weight."""

    def __init__(self, edges: list["Edge"]):
        self.edges = edges
        listed = ", ".join(str(edge) for edge in edges)
        super().__init__(f"Negative edge weights are not supported by shortest paths: {listed}")


@dataclass(frozen=True)
class Edge:
    """Immutable directed, weighted connection between two vertices.

    Attributes:
        source: Vertex the edge leaves
        target: Vertex the edge enters
        weight: Integer edge weight (0 when unspecified)
    """

    source: int
    target: int
    weight: int = 0

    def __str__(self) -> str:
        return f"({self.source}, {self.target}, weight = {self.weight})"


class Graph:
    """Adjacency-list graph with a fixed vertex set.

    Each vertex owns an ordered list of its outgoing edges. Insertion order is
    preserved and parallel edges are stored independently, so adding the same
    ``(source, target)`` pair twice keeps both edges.

    Thread-safety:
        This class is NOT thread-safe. Build the edge set once, then run
        traversals; every traversal keeps its own private state.

    Example:
        >>> graph = Graph(3)
        >>> graph.add_edge(0, 1, 5)
        >>> graph.add_undirected_edge(1, 2)
        >>> graph.neighbors(1)
        [2]
        >>> graph.dfs(0)
        [0, 1, 2]
    """

    def __init__(self, vertex_count: int):
        """Initialize a graph with ``vertex_count`` vertices and no edges.

        Args:
            vertex_count: Number of vertices; must be a non-negative int

        Raises:
            ValueError: If vertex_count is negative or not an int
        """
        if isinstance(vertex_count, bool) or not isinstance(vertex_count, int):
            msg = f"Vertex count must be an int, got {type(vertex_count).__name__}"
            raise ValueError(msg)
        if vertex_count < 0:
            msg = f"Vertex count must be non-negative, got {vertex_count}"
            raise ValueError(msg)

        self._vertex_count = vertex_count
        self._adjacency: list[list[Edge]] = [[] for _ in range(vertex_count)]

        logger.debug("graph_initialized", vertex_count=vertex_count)

    @property
    def vertex_count(self) -> int:
        """Number of vertices, fixed at construction."""
        return self._vertex_count

    @property
    def edge_count(self) -> int:
        """Total number of stored directed edges, parallel edges included."""
        return sum(len(edges) for edges in self._adjacency)

    def vertices(self) -> range:
        """Return the vertex ids of this graph."""
        return range(self._vertex_count)

    def check_vertex(self, vertex: Any) -> int:
        """Ensure ``vertex`` is a valid vertex id of this graph.

        Args:
            vertex: Candidate vertex id

        Returns:
            The vertex id, unchanged

        Raises:
            InvalidVertexError: If vertex is not an int in [0, vertex_count)
        """
        if (
            isinstance(vertex, bool)
            or not isinstance(vertex, int)
            or not 0 <= vertex < self._vertex_count
        ):
            logger.warning(
                "invalid_vertex_rejected",
                vertex=repr(vertex),
                vertex_count=self._vertex_count,
            )
            raise InvalidVertexError(vertex, self._vertex_count)
        return vertex

    # -----------------
    # MUTATION
    # -----------------

    def add_edge(self, source: int, target: int, weight: int = 0) -> None:
        """Add a directed edge ``source -> target`` with the given weight.

        Args:
            source: Vertex the edge leaves
            target: Vertex the edge enters
            weight: Integer edge weight

        Raises:
            InvalidVertexError: If either endpoint is out of range
        """
        self.check_vertex(source)
        self.check_vertex(target)

        self._adjacency[source].append(Edge(source, target, weight))

        logger.debug("edge_added", source=source, target=target, weight=weight)

    def add_undirected_edge(self, first: int, second: int, weight: int = 0) -> None:
        """Add an undirected edge as two directed edges with swapped endpoints.

        Both endpoints are validated before anything is stored.

        Raises:
            InvalidVertexError: If either endpoint is out of range
        """
        self.check_vertex(first)
        self.check_vertex(second)

        self.add_edge(first, second, weight)
        self.add_edge(second, first, weight)

    # -----------------
    # ADJACENCY QUERIES
    # -----------------

    def is_adjacent(self, source: int, target: int) -> bool:
        """Return True if some stored edge runs from ``source`` to ``target``."""
        self.check_vertex(source)
        self.check_vertex(target)
        return any(edge.target == target for edge in self._adjacency[source])

    def neighbors(self, vertex: int) -> list[int]:
        """Return the targets of the outgoing edges of ``vertex``.

        Targets come in insertion order and are not deduplicated.
        """
        self.check_vertex(vertex)
        return [edge.target for edge in self._adjacency[vertex]]

    def in_degree(self, vertex: int) -> int:
        """Return the number of vertices with an edge into ``vertex``.

        Every vertex is scanned with is_adjacent, so parallel edges from the
        same predecessor count once.
        """
        self.check_vertex(vertex)
        return sum(1 for other in self.vertices() if self.is_adjacent(other, vertex))

    def get_edge(self, source: int, target: int) -> Edge | None:
        """Return the first stored edge ``source -> target``, or None."""
        self.check_vertex(source)
        self.check_vertex(target)
        for edge in self._adjacency[source]:
            if edge.target == target:
                return edge
        return None

    def edges(self, vertex: int | None = None) -> list[Edge]:
        """Return stored edges of one vertex, or of every vertex in id order."""
        if vertex is not None:
            self.check_vertex(vertex)
            return list(self._adjacency[vertex])
        return [edge for edges in self._adjacency for edge in edges]

    # -----------------
    # DEPTH-FIRST QUERIES
    # -----------------

    def dfs(self, start: int) -> list[int]:
        """Return every vertex reachable from ``start`` in depth-first order."""
        return list(DepthFirstIterator(self, start))

    def path_exists(self, start: int, stop: int) -> bool:
        """Return True if ``stop`` is reachable from ``start``.

        A vertex always reaches itself.
        """
        self.check_vertex(start)
        self.check_vertex(stop)
        if start == stop:
            return True
        return stop in self.dfs(start)

    def path(self, start: int, stop: int) -> list[int]:
        """Reconstruct some path from ``start`` to ``stop``.

        The depth-first order produced before ``stop`` is walked backwards,
        greedily keeping the most recent vertex with an edge into the current
        tail of the path. The result is valid but neither shortest nor
        canonical.

        Returns:
            The path as a list of vertices, ``[start]`` when start == stop,
            or an empty list when stop is unreachable
        """
        if not self.path_exists(start, stop):
            logger.debug("path_not_found", start=start, stop=stop)
            return []
        if start == stop:
            return [start]

        prefix: list[int] = []
        for vertex in DepthFirstIterator(self, start):
            if vertex == stop:
                break
            prefix.append(vertex)

        tail = stop
        reversed_path = [stop]
        for vertex in reversed(prefix):
            if vertex == start and self.is_adjacent(start, tail):
                reversed_path.append(vertex)
                break
            if self.is_adjacent(vertex, tail):
                reversed_path.append(vertex)
                tail = vertex

        reversed_path.reverse()
        return reversed_path

    # -----------------
    # TOPOLOGICAL ORDER
    # -----------------

    def __iter__(self) -> Iterator[int]:
        """Iterate over the vertices in topological order."""
        return TopologicalIterator(self)

    def topological_sort(self, strict: bool = False) -> list[int]:
        """Return the vertices in topological order.

        Vertices on a cycle, or reachable only through one, are left out.

        Args:
            strict: Raise instead of returning a partial order

        Returns:
            List of vertex ids in topological order

        Raises:
            CycleDetectedError: If strict and some vertices could not be ordered
        """
        order = list(TopologicalIterator(self))

        if len(order) < self._vertex_count:
            missing = sorted(set(self.vertices()) - set(order))
            logger.warning(
                "topological_sort_incomplete",
                ordered=len(order),
                vertex_count=self._vertex_count,
                unordered_vertices=missing,
            )
            if strict:
                msg = f"Cycle detected: vertices {missing} cannot be topologically ordered"
                raise CycleDetectedError(msg)

        return order

    # -----------------
    # SHORTEST PATHS
    # -----------------

    def _relax_from(self, start: int) -> tuple[dict[int, float], dict[int, int], set[int]]:
        """Run lazy-deletion Dijkstra from ``start``.

        Every tentative distance starts at infinity except ``start`` (0), so
        arbitrarily large integer weights compare correctly.

        Returns:
            Tuple of (tentative distances, predecessors, finalized vertices)

        Raises:
            NegativeWeightError: If any stored edge has a negative weight
        """
        negative = [edge for edge in self.edges() if edge.weight < 0]
        if negative:
            logger.warning(
                "shortest_path_negative_weights",
                start=start,
                edges=[str(edge) for edge in negative],
            )
            raise NegativeWeightError(negative)

        distance: dict[int, float] = dict.fromkeys(self.vertices(), math.inf)
        distance[start] = 0
        predecessor: dict[int, int] = {}
        finalized: set[int] = set()

        queue = [(0, start)]
        while queue:
            _, current = heapq.heappop(queue)
            if current in finalized:
                continue
            finalized.add(current)

            for edge in self._adjacency[current]:
                candidate = distance[current] + edge.weight
                if candidate < distance[edge.target]:
                    distance[edge.target] = candidate
                    predecessor[edge.target] = current
                # Stale entries are filtered by the finalized check on pop
                heapq.heappush(queue, (distance[edge.target], edge.target))

        return distance, predecessor, finalized

    def shortest_distances(self, start: int) -> dict[int, int]:
        """Return the shortest distance from ``start`` to every reachable vertex.

        Unreachable vertices are absent from the result.
        """
        self.check_vertex(start)
        distance, _, finalized = self._relax_from(start)
        return {vertex: distance[vertex] for vertex in sorted(finalized)}

    def shortest_path(self, start: int, stop: int) -> list[int]:
        """Return the lightest path from ``start`` to ``stop`` by edge weight.

        Every edge weight must be non-negative.

        Returns:
            List of vertices from start to stop; ``[start]`` when start == stop

        Raises:
            InvalidVertexError: If either vertex is out of range
            NoPathFoundError: If stop is unreachable from start
            NegativeWeightError: If the graph stores a negative edge weight
        """
        self.check_vertex(start)
        self.check_vertex(stop)
        if start == stop:
            return [start]

        distance, predecessor, finalized = self._relax_from(start)

        if stop not in finalized:
            logger.info("shortest_path_unreachable", start=start, stop=stop)
            raise NoPathFoundError(start, stop)

        reversed_path = [stop]
        vertex = stop
        while vertex != start:
            vertex = predecessor[vertex]
            reversed_path.append(vertex)
        reversed_path.reverse()

        logger.debug(
            "shortest_path_found",
            start=start,
            stop=stop,
            cost=distance[stop],
            hops=len(reversed_path) - 1,
        )
        return reversed_path

    def path_weight(self, path: Sequence[int]) -> int:
        """Return the total weight of a vertex sequence.

        Between consecutive vertices the lightest parallel edge is used.

        Raises:
            InvalidVertexError: If any vertex is out of range
            ValueError: If two consecutive vertices are not adjacent
        """
        for vertex in path:
            self.check_vertex(vertex)

        total = 0
        for source, target in zip(path, path[1:]):
            weights = [edge.weight for edge in self.edges(source) if edge.target == target]
            if not weights:
                msg = f"No edge from {source} to {target}"
                raise ValueError(msg)
            total += min(weights)
        return total

    # -----------------
    # INSPECTION
    # -----------------

    def get_stats(self) -> dict[str, int]:
        """Get statistics about the graph.

        Returns:
            Dictionary with vertex_count, edge_count, source_count (vertices
            with in-degree zero) and sink_count (vertices without outgoing edges)
        """
        stats = {
            "vertex_count": self._vertex_count,
            "edge_count": self.edge_count,
            "source_count": sum(1 for v in self.vertices() if self.in_degree(v) == 0),
            "sink_count": sum(1 for edges in self._adjacency if not edges),
        }

        logger.debug("graph_stats_retrieved", **stats)

        return stats

    def copy(self) -> "Graph":
        """Create an independent copy with the same vertices and edges."""
        new_graph = Graph(self._vertex_count)
        # Edge records are frozen and shared between copies
        new_graph._adjacency = [list(edges) for edges in self._adjacency]

        logger.debug("graph_copied", vertex_count=self._vertex_count, edge_count=self.edge_count)

        return new_graph

    def __repr__(self) -> str:
        return f"Graph(vertex_count={self._vertex_count}, edge_count={self.edge_count})"
