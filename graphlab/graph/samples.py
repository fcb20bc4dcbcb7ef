"""Demonstration graphs from the graph lab.

Each builder returns a freshly populated Graph. ``weighted`` is the graph of
the lab's shortest-path driver; the lightest route from 0 to 2 is
``0 -> 3 -> 2`` with cost 50.
"""

from collections.abc import Callable

from graphlab.graph.graph import Graph


def build_g1() -> Graph:
    """Directed graph with the cycle 0 -> 2 -> 0."""
    graph = Graph(5)
    graph.add_edge(0, 1)
    graph.add_edge(0, 2)
    graph.add_edge(0, 4)
    graph.add_edge(1, 2)
    graph.add_edge(2, 0)
    graph.add_edge(2, 3)
    graph.add_edge(4, 3)
    return graph


def build_g2() -> Graph:
    """Directed acyclic version of g1."""
    graph = Graph(5)
    graph.add_edge(0, 1)
    graph.add_edge(0, 2)
    graph.add_edge(0, 4)
    graph.add_edge(1, 2)
    graph.add_edge(2, 3)
    graph.add_edge(4, 3)
    return graph


def build_g3() -> Graph:
    """Undirected graph with two components: {0, 2, 3, 6} and {1, 4, 5}."""
    graph = Graph(7)
    graph.add_undirected_edge(0, 2)
    graph.add_undirected_edge(0, 3)
    graph.add_undirected_edge(1, 4)
    graph.add_undirected_edge(1, 5)
    graph.add_undirected_edge(2, 3)
    graph.add_undirected_edge(2, 6)
    graph.add_undirected_edge(4, 5)
    return graph


def build_g4() -> Graph:
    """Directed graph where 4 feeds the cycle 0 -> 1 -> 2 -> 0."""
    graph = Graph(5)
    graph.add_edge(0, 1)
    graph.add_edge(1, 2)
    graph.add_edge(2, 0)
    graph.add_edge(2, 3)
    graph.add_edge(4, 2)
    return graph


def build_weighted() -> Graph:
    """Weighted directed graph used by the shortest-path demonstration."""
    graph = Graph(5)
    graph.add_edge(0, 1, 10)
    graph.add_edge(0, 3, 30)
    graph.add_edge(0, 4, 100)
    graph.add_edge(1, 2, 50)
    graph.add_edge(2, 4, 10)
    graph.add_edge(3, 4, 60)
    graph.add_edge(3, 2, 20)
    return graph


SAMPLE_GRAPHS: dict[str, Callable[[], Graph]] = {
    "g1": build_g1,
    "g2": build_g2,
    "g3": build_g3,
    "g4": build_g4,
    "weighted": build_weighted,
}


def build_sample(name: str) -> Graph:
    """Build the sample graph registered under ``name``.

    Raises:
        KeyError: If no sample has that name
    """
    try:
        builder = SAMPLE_GRAPHS[name]
    except KeyError:
        msg = f"Unknown sample graph: {name}. Choose from {', '.join(sorted(SAMPLE_GRAPHS))}"
        raise KeyError(msg) from None
    return builder()
