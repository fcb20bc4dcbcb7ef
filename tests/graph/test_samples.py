"""Unit tests for the sample graph builders."""

import pytest

from graphlab.graph.samples import SAMPLE_GRAPHS, build_sample


class TestSampleGraphs:
    """Test the registered demonstration graphs."""

    @pytest.mark.parametrize(
        ("name", "vertex_count", "edge_count"),
        [
            ("g1", 5, 7),
            ("g2", 5, 6),
            ("g3", 7, 14),
            ("g4", 5, 5),
            ("weighted", 5, 7),
        ],
    )
    def test_sample_sizes(self, name, vertex_count, edge_count):
        """Test the size of every sample graph."""
        graph = build_sample(name)

        assert graph.vertex_count == vertex_count
        assert graph.edge_count == edge_count

    def test_builders_return_fresh_graphs(self):
        """Test that each call builds a new graph."""
        first = build_sample("g1")
        first.add_edge(3, 0)

        assert not build_sample("g1").is_adjacent(3, 0)

    def test_unknown_sample(self):
        """Test that unknown names raise KeyError listing the choices."""
        with pytest.raises(KeyError, match="Unknown sample graph: nope"):
            build_sample("nope")

    def test_registry_names(self):
        """Test the registered sample names."""
        assert sorted(SAMPLE_GRAPHS) == ["g1", "g2", "g3", "g4", "weighted"]
