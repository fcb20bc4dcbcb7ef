"""Unit tests for the command-line driver."""

from pathlib import Path

import pytest
import structlog
import yaml

from main import format_vertices, main, parse_args


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch):
    """Run each test from an empty directory so no default config is found."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Fixture providing a configuration file with one weighted graph."""
    config_path = tmp_path / "graphs.yaml"
    config_path.write_text(
        yaml.dump(
            {
                "logging_level": "WARNING",
                "graphs": [
                    {
                        "name": "triangle",
                        "vertex_count": 3,
                        "edges": [
                            {"source": 0, "target": 1, "weight": 1},
                            {"source": 1, "target": 2, "weight": 1},
                            {"source": 0, "target": 2, "weight": 5},
                        ],
                    },
                ],
            },
        ),
    )
    return config_path


class TestParseArgs:
    """Test argument parsing."""

    def test_default_command_is_demo(self):
        """Test that no command runs the demo."""
        args = parse_args([])

        assert args.command == "demo"
        assert args.config is None
        assert args.log_level is None

    def test_path_arguments(self):
        """Test parsing vertex arguments."""
        args = parse_args(["--graph", "g1", "path", "0", "3"])

        assert args.graph == "g1"
        assert (args.start, args.stop) == (0, 3)

    def test_render_format(self):
        """Test the render format option."""
        assert parse_args(["render", "--format", "dot"]).output_format == "dot"


class TestCommands:
    """Test running commands end to end."""

    def test_demo(self, capsys):
        """Test the shortest-path demonstration."""
        assert main(["demo"]) == 0
        assert "[0, 3, 2]" in capsys.readouterr().out

    def test_dfs(self, capsys):
        """Test the dfs command."""
        assert main(["--graph", "g1", "dfs", "0"]) == 0
        assert "[0, 4, 3, 2, 1]" in capsys.readouterr().out

    def test_path(self, capsys):
        """Test the path command."""
        assert main(["--graph", "g1", "path", "0", "3"]) == 0
        assert "[0, 4, 3]" in capsys.readouterr().out

    def test_path_missing(self, capsys):
        """Test the path command without a path."""
        assert main(["--graph", "g1", "path", "4", "0"]) == 0
        assert "No path from 4 to 0" in capsys.readouterr().out

    def test_shortest_path(self, capsys):
        """Test the shortest-path command on the default sample."""
        assert main(["shortest-path", "0", "4"]) == 0
        assert "[0, 3, 2, 4] cost=60" in capsys.readouterr().out

    def test_shortest_path_unreachable(self, capsys):
        """Test that an unreachable target fails with exit code 1."""
        assert main(["shortest-path", "4", "0"]) == 1
        assert "No path from 4 to 0" in capsys.readouterr().err

    def test_invalid_vertex(self, capsys):
        """Test that an invalid vertex fails with exit code 1."""
        assert main(["--graph", "g1", "dfs", "9"]) == 1
        assert "Invalid vertex 9" in capsys.readouterr().err

    def test_topo(self, capsys):
        """Test the topo command."""
        assert main(["--graph", "g2", "topo"]) == 0
        assert "[0, 4, 1, 2, 3]" in capsys.readouterr().out

    def test_topo_strict_with_cycle(self, capsys):
        """Test that strict topo fails on a cyclic graph."""
        assert main(["--graph", "g4", "topo", "--strict"]) == 1
        assert "Cycle detected" in capsys.readouterr().err

    def test_validate(self, capsys):
        """Test the validate command."""
        assert main(["validate"]) == 0
        assert "Validation Status: PASS" in capsys.readouterr().out

    def test_render(self, capsys):
        """Test the render command."""
        assert main(["--graph", "g2", "render", "--format", "dot"]) == 0
        assert "digraph Graph {" in capsys.readouterr().out

    def test_unknown_sample(self, capsys):
        """Test that an unknown sample name fails."""
        assert main(["--graph", "nope", "dfs", "0"]) == 1
        assert "Unknown sample graph: nope" in capsys.readouterr().err

    def test_negative_weight_shortest_path(self, capsys, tmp_path):
        """Test that a negative weight fails with exit code 1 instead of hanging."""
        config_path = tmp_path / "negative.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "graphs": [
                        {
                            "name": "loop",
                            "vertex_count": 3,
                            "edges": [
                                {"source": 0, "target": 1, "weight": 1},
                                {"source": 1, "target": 2, "weight": 1},
                                {"source": 2, "target": 1, "weight": -5},
                            ],
                        },
                    ],
                },
            ),
        )

        assert main(["--config", str(config_path), "shortest-path", "0", "2"]) == 1
        assert "Negative edge weights" in capsys.readouterr().err

    def test_context_unbound_after_command(self):
        """Test that the graph and command bindings do not outlive main()."""
        structlog.contextvars.bind_contextvars(correlation_id="outer")

        try:
            assert main(["--graph", "g1", "dfs", "0"]) == 0
            assert structlog.contextvars.get_contextvars() == {"correlation_id": "outer"}
        finally:
            structlog.contextvars.clear_contextvars()


class TestConfigFile:
    """Test loading graphs from a configuration file."""

    def test_shortest_path_from_config(self, capsys, config_file):
        """Test a query against a configured graph."""
        assert main(["--config", str(config_file), "shortest-path", "0", "2"]) == 0
        assert "[0, 1, 2] cost=2" in capsys.readouterr().out

    def test_unknown_graph_in_config(self, capsys, config_file):
        """Test selecting a graph the file does not define."""
        assert main(["--config", str(config_file), "--graph", "square", "dfs", "0"]) == 1
        assert "Graph not found in configuration: square" in capsys.readouterr().err

    def test_missing_config(self, capsys, tmp_path):
        """Test a configuration path that does not exist."""
        assert main(["--config", str(tmp_path / "absent.yaml"), "dfs", "0"]) == 1
        assert "Configuration file not found" in capsys.readouterr().err

    def test_default_config_in_working_directory(self, capsys, config_file):
        """Test that graphlab.yaml in the working directory is used without --config."""
        config_file.rename(config_file.with_name("graphlab.yaml"))

        assert main(["shortest-path", "0", "2"]) == 0
        assert "[0, 1, 2] cost=2" in capsys.readouterr().out

    def test_explicit_config_wins_over_default(self, capsys, config_file, tmp_path):
        """Test that --config is preferred over a default file."""
        (tmp_path / "graphlab.yaml").write_text("not: [valid\n")

        assert main(["--config", str(config_file), "shortest-path", "0", "2"]) == 0
        assert "cost=2" in capsys.readouterr().out

    def test_non_mapping_config(self, capsys, tmp_path):
        """Test that a list at the top of the file is reported, not raised."""
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- 1\n- 2\n")

        assert main(["--config", str(config_path), "dfs", "0"]) == 1
        assert "Configuration must be a mapping" in capsys.readouterr().err


def test_format_vertices():
    """Test the list formatting used for output."""
    assert format_vertices([0, 3, 2]) == "[0, 3, 2]"
    assert format_vertices([]) == "[]"
