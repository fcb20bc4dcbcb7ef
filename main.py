#!/usr/bin/env python3
"""Main Entry Point and CLI Integration.

This module provides the command-line demonstration driver for the graph lab.
It loads a graph (a built-in sample or one defined in a configuration file),
configures logging, and runs one traversal or query against it.

Examples:
    python main.py demo
    python main.py --graph g1 dfs 0
    python main.py --graph g1 path 0 3
    python main.py --config examples/graphs.yaml --graph roads shortest-path 0 4
    python main.py --graph g4 topo --strict
    python main.py --graph g3 render --format dot
"""

import argparse
import sys

import structlog

from graphlab.config import LabConfig, find_default_config, load_config
from graphlab.graph.graph import Graph, GraphError
from graphlab.graph.samples import SAMPLE_GRAPHS, build_sample
from graphlab.graph.validator import GraphValidator
from graphlab.log_config import LOG_LEVELS, configure_logging, log_context

logger = structlog.get_logger(__name__)

DEFAULT_SAMPLE = "weighted"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list; defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Run graph traversals and shortest-path queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Built-in sample graphs: {', '.join(sorted(SAMPLE_GRAPHS))}",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=(
            "Path to a YAML/JSON file defining graphs "
            "(default: graphlab.yaml, graphlab.yml or graphlab.json in the "
            "working directory, else the built-in samples)"
        ),
    )
    parser.add_argument(
        "--graph",
        type=str,
        default=None,
        help=f"Graph name (default: first configured graph, or '{DEFAULT_SAMPLE}')",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: WARNING, or the configured level)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Render logs as JSON",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    commands.add_parser("demo", help="Shortest path from 0 to 2 on the weighted sample")

    dfs_parser = commands.add_parser("dfs", help="Depth-first order from a vertex")
    dfs_parser.add_argument("start", type=int)

    path_parser = commands.add_parser("path", help="Some path between two vertices")
    path_parser.add_argument("start", type=int)
    path_parser.add_argument("stop", type=int)

    shortest_parser = commands.add_parser("shortest-path", help="Lightest path by edge weight")
    shortest_parser.add_argument("start", type=int)
    shortest_parser.add_argument("stop", type=int)

    topo_parser = commands.add_parser("topo", help="Topological order of the graph")
    topo_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a cycle prevents a complete order",
    )

    commands.add_parser("validate", help="Report cycles, negative weights and other issues")

    render_parser = commands.add_parser("render", help="Render the graph as text")
    render_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["mermaid", "dot"],
        default="mermaid",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "demo"
    return args


def load_graph(args: argparse.Namespace, config: LabConfig | None = None) -> tuple[str, Graph]:
    """Build the graph selected by the command-line arguments.

    Args:
        args: Parsed command-line arguments
        config: Loaded configuration, if a file was given or found

    Returns:
        Tuple of (graph name, populated Graph)

    Raises:
        KeyError: If the requested graph does not exist
    """
    if args.command == "demo":
        return DEFAULT_SAMPLE, build_sample(DEFAULT_SAMPLE)

    if config is not None:
        graph_config = config.get_graph(args.graph)
        return graph_config.name, graph_config.build()

    name = args.graph or DEFAULT_SAMPLE
    return name, build_sample(name)


def format_vertices(vertices: list[int]) -> str:
    """Format a vertex sequence the way the lab printed lists."""
    return "[" + ", ".join(str(v) for v in vertices) + "]"


def run_command(args: argparse.Namespace, graph: Graph) -> int:
    """Run the selected command and print its result.

    Args:
        args: Parsed command-line arguments
        graph: Graph to query

    Returns:
        Exit code (0 for success, 1 for failure)

    Raises:
        GraphError: If the query itself fails
    """
    if args.command == "demo":
        print(format_vertices(graph.shortest_path(0, 2)))
        return 0

    if args.command == "dfs":
        print(f"DFS traversal starting at {args.start}")
        print(format_vertices(graph.dfs(args.start)))
        return 0

    if args.command == "path":
        print(f"Path from {args.start} to {args.stop}")
        result = graph.path(args.start, args.stop)
        if not result:
            print(f"No path from {args.start} to {args.stop}")
            return 0
        print(format_vertices(result))
        return 0

    if args.command == "shortest-path":
        result = graph.shortest_path(args.start, args.stop)
        print(f"{format_vertices(result)} cost={graph.path_weight(result)}")
        return 0

    if args.command == "topo":
        print("Topological sort")
        print(format_vertices(graph.topological_sort(strict=args.strict)))
        return 0

    validator = GraphValidator()

    if args.command == "validate":
        report = validator.validate(graph)
        print(report.summary())
        return 0 if report.is_valid else 1

    print(validator.generate_visualization(graph, args.output_format))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Argument list; defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)

    configure_logging(args.log_level or "WARNING", json_logs=args.json_logs)

    try:
        config_path = args.config or find_default_config()
        config = load_config(config_path) if config_path else None
        if config is not None and args.log_level is None:
            configure_logging(config.logging_level, json_logs=config.json_logs or args.json_logs)
        name, graph = load_graph(args, config)
    except (FileNotFoundError, ValueError, KeyError) as e:
        # KeyError's str() wraps the message in quotes
        message = e.args[0] if isinstance(e, KeyError) and e.args else str(e)
        logger.error("graph_load_failed", error=message)
        print(f"Error: {message}", file=sys.stderr)
        return 1

    with log_context(graph=name, command=args.command):
        logger.info(
            "command_started",
            vertex_count=graph.vertex_count,
            edge_count=graph.edge_count,
        )

        try:
            exit_code = run_command(args, graph)
        except GraphError as e:
            logger.warning("command_failed", error=e.message)
            print(f"Error: {e.message}", file=sys.stderr)
            exit_code = 1

        logger.info("command_finished", exit_code=exit_code)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
