"""Unit tests for Dijkstra shortest paths.

Tests cover:
- The lab's weighted demonstration graph
- Trivial and unreachable queries
- Parallel edges, zero weights and undirected edges
- Distance maps and path weights
- Large weights and negative weights
"""

import pytest

from graphlab.graph.graph import (
    Graph,
    GraphError,
    InvalidVertexError,
    NegativeWeightError,
    NoPathFoundError,
)
from graphlab.graph.samples import build_g3, build_weighted

# Cost of the lab's demonstration query 0 -> 2
DEMO_COST = 50


class TestShortestPath:
    """Test shortest_path() on weighted graphs."""

    def test_demo_query(self):
        """Test the lab's demonstration: 0 -> 3 -> 2 with cost 50."""
        graph = build_weighted()

        result = graph.shortest_path(0, 2)

        assert result == [0, 3, 2]
        assert graph.path_weight(result) == DEMO_COST

    def test_longer_route_beats_direct_edge(self):
        """Test that a multi-hop route beats the heavy direct edge 0 -> 4."""
        graph = build_weighted()

        result = graph.shortest_path(0, 4)

        assert result == [0, 3, 2, 4]
        assert graph.path_weight(result) == 60

    def test_start_equals_stop(self):
        """Test that a vertex reaches itself with the singleton path."""
        graph = build_weighted()

        for vertex in graph.vertices():
            assert graph.shortest_path(vertex, vertex) == [vertex]
            assert graph.path_weight([vertex]) == 0

    def test_start_equals_stop_without_edges(self):
        """Test the trivial path on an edgeless graph."""
        assert Graph(1).shortest_path(0, 0) == [0]

    def test_unreachable_raises(self):
        """Test that an unreachable stop raises NoPathFoundError."""
        with pytest.raises(NoPathFoundError) as exc_info:
            build_weighted().shortest_path(4, 0)

        assert exc_info.value.start == 4
        assert exc_info.value.stop == 0
        assert "No path from 4 to 0" in str(exc_info.value)

    def test_no_path_is_graph_error(self):
        """Test the exception hierarchy."""
        with pytest.raises(GraphError):
            Graph(2).shortest_path(0, 1)

    def test_parallel_edges_use_lightest(self):
        """Test that the lighter of two parallel edges is used."""
        graph = Graph(2)
        graph.add_edge(0, 1, 5)
        graph.add_edge(0, 1, 2)

        assert graph.shortest_path(0, 1) == [0, 1]
        assert graph.shortest_distances(0) == {0: 0, 1: 2}
        assert graph.path_weight([0, 1]) == 2

    def test_zero_weight_edges(self):
        """Test that unweighted edges still produce a path."""
        graph = Graph(3)
        graph.add_edge(0, 1)
        graph.add_edge(1, 2)

        assert graph.shortest_path(0, 2) == [0, 1, 2]

    def test_undirected_graph(self):
        """Test shortest paths across undirected edges."""
        graph = build_g3()

        assert graph.shortest_path(0, 6) == [0, 2, 6]
        assert graph.shortest_path(6, 0) == [6, 2, 0]

    def test_reverse_direction_unreachable_in_directed_graph(self):
        """Test that edge direction matters."""
        graph = Graph(2)
        graph.add_edge(0, 1, 1)

        assert graph.shortest_path(0, 1) == [0, 1]
        with pytest.raises(NoPathFoundError):
            graph.shortest_path(1, 0)

    def test_single_heavy_edge(self):
        """Test that an edge heavier than ten million is still found."""
        graph = Graph(2)
        graph.add_edge(0, 1, 20_000_000)

        assert graph.shortest_path(0, 1) == [0, 1]
        assert graph.shortest_distances(0) == {0: 0, 1: 20_000_000}

    def test_heavy_multi_hop_route(self):
        """Test a route whose total weight exceeds ten million."""
        graph = Graph(3)
        graph.add_edge(0, 1, 6_000_000)
        graph.add_edge(1, 2, 6_000_000)

        assert graph.shortest_path(0, 2) == [0, 1, 2]
        assert graph.shortest_distances(0)[2] == 12_000_000


class TestShortestDistances:
    """Test the distance map."""

    def test_distances_from_source(self):
        """Test all shortest distances in the weighted graph."""
        assert build_weighted().shortest_distances(0) == {0: 0, 1: 10, 2: 50, 3: 30, 4: 60}

    def test_unreachable_vertices_absent(self):
        """Test that unreachable vertices are left out."""
        assert build_weighted().shortest_distances(2) == {2: 0, 4: 10}

    def test_distances_match_path_weights(self):
        """Test that every reconstructed path costs its distance."""
        graph = build_weighted()
        distances = graph.shortest_distances(0)

        for stop, distance in distances.items():
            assert graph.path_weight(graph.shortest_path(0, stop)) == distance


class TestPathWeight:
    """Test path_weight()."""

    def test_sums_edge_weights(self):
        """Test summing a multi-edge path."""
        assert build_weighted().path_weight([0, 1, 2, 4]) == 70

    def test_empty_path(self):
        """Test that an empty path weighs nothing."""
        assert build_weighted().path_weight([]) == 0

    def test_gap_raises(self):
        """Test that non-adjacent consecutive vertices raise ValueError."""
        with pytest.raises(ValueError, match="No edge from 4 to 0"):
            build_weighted().path_weight([4, 0])

    def test_invalid_vertex_raises(self):
        """Test that an out-of-range vertex is rejected even without a gap."""
        graph = build_weighted()

        with pytest.raises(InvalidVertexError):
            graph.path_weight([99])
        with pytest.raises(InvalidVertexError):
            graph.path_weight([0, 1, 99])


class TestNegativeWeights:
    """Test that shortest paths refuse negative edge weights."""

    @staticmethod
    def build_negative_cycle() -> Graph:
        graph = Graph(3)
        graph.add_edge(0, 1, 1)
        graph.add_edge(1, 2, 1)
        graph.add_edge(2, 1, -5)
        return graph

    def test_negative_cycle_raises(self):
        """Test that a negative cycle fails fast instead of looping."""
        with pytest.raises(NegativeWeightError) as exc_info:
            self.build_negative_cycle().shortest_path(0, 2)

        assert exc_info.value.edges == [self.build_negative_cycle().get_edge(2, 1)]
        assert "(2, 1, weight = -5)" in str(exc_info.value)

    def test_distances_raise(self):
        """Test that the distance map applies the same check."""
        with pytest.raises(NegativeWeightError):
            self.build_negative_cycle().shortest_distances(0)

    def test_is_graph_error(self):
        """Test the exception hierarchy."""
        graph = Graph(2)
        graph.add_edge(0, 1, -1)

        with pytest.raises(GraphError):
            graph.shortest_path(0, 1)

    def test_trivial_query_skips_check(self):
        """Test that start == stop returns without relaxing any edge."""
        assert self.build_negative_cycle().shortest_path(1, 1) == [1]
