"""Lazy traversal iterators over a Graph.

Both iterators hold private, single-use state (a stack fringe and a visited
set) and follow the Python iterator protocol: each ``next()`` produces one
vertex until the traversal is exhausted. They are not restartable; build a
new iterator to traverse again.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from graphlab.graph.graph import Graph

logger = structlog.get_logger(__name__)


class DepthFirstIterator(Iterator[int]):
    """Stack-based depth-first traversal from a start vertex.

    Each step pops a vertex from the fringe. An already visited vertex is
    skipped. Otherwise its neighbours that are neither visited nor already on
    the fringe are pushed in adjacency order, and the vertex is marked visited
    and produced. Every vertex reachable from ``start`` is produced exactly
    once.

    Example:
        >>> graph = Graph(3)
        >>> graph.add_edge(0, 1)
        >>> graph.add_edge(0, 2)
        >>> list(DepthFirstIterator(graph, 0))
        [0, 2, 1]
    """

    def __init__(self, graph: "Graph", start: int):
        graph.check_vertex(start)
        self._graph = graph
        self._fringe: list[int] = [start]
        self._on_fringe: set[int] = {start}
        self._visited: set[int] = set()

    @property
    def fringe(self) -> tuple[int, ...]:
        """Snapshot of the fringe, bottom of the stack first."""
        return tuple(self._fringe)

    @property
    def visited(self) -> frozenset[int]:
        """Vertices produced so far."""
        return frozenset(self._visited)

    def __iter__(self) -> "DepthFirstIterator":
        return self

    def __next__(self) -> int:
        while self._fringe:
            vertex = self._fringe.pop()
            self._on_fringe.discard(vertex)
            if vertex in self._visited:
                continue

            for neighbor in self._graph.neighbors(vertex):
                if neighbor not in self._visited and neighbor not in self._on_fringe:
                    self._fringe.append(neighbor)
                    self._on_fringe.add(neighbor)
            self._visited.add(vertex)
            return vertex

        raise StopIteration


class TopologicalIterator(Iterator[int]):
    """Kahn-style topological traversal of a whole graph.

    The fringe starts with every vertex of in-degree zero, pushed in id
    order. Each step pops a vertex, marks it visited and decrements the
    in-degree of each of its distinct successors; any unvisited vertex whose
    in-degree has dropped to zero and is not yet on the fringe is then pushed.

    Vertices on a cycle never reach in-degree zero and are never produced.
    """

    def __init__(self, graph: "Graph"):
        self._graph = graph
        self._fringe: list[int] = []
        self._visited: set[int] = set()
        self._in_degrees: list[int] = []

        for vertex in graph.vertices():
            degree = graph.in_degree(vertex)
            self._in_degrees.append(degree)
            if degree == 0:
                self._fringe.append(vertex)

        logger.debug(
            "topological_iterator_initialized",
            vertex_count=graph.vertex_count,
            initial_fringe=list(self._fringe),
        )

    @property
    def fringe(self) -> tuple[int, ...]:
        """Snapshot of the fringe, bottom of the stack first."""
        return tuple(self._fringe)

    @property
    def in_degrees(self) -> tuple[int, ...]:
        """Remaining in-degree of every vertex."""
        return tuple(self._in_degrees)

    def __iter__(self) -> "TopologicalIterator":
        return self

    def __next__(self) -> int:
        if not self._fringe:
            raise StopIteration

        vertex = self._fringe.pop()
        self._visited.add(vertex)

        # in_degree counts distinct predecessors, so parallel edges decrement once
        for successor in dict.fromkeys(self._graph.neighbors(vertex)):
            self._in_degrees[successor] -= 1

        for candidate in self._graph.vertices():
            if (
                candidate not in self._visited
                and candidate not in self._fringe
                and self._in_degrees[candidate] == 0
            ):
                self._fringe.append(candidate)

        return vertex
