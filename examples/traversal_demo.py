"""Demonstration of the graph lab traversals with structured logging.

This example walks the lab's sample graphs: depth-first orders, reconstructed
paths, a topological sort and the weighted shortest-path query.
"""

import sys
from pathlib import Path

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from graphlab.graph.graph import NoPathFoundError
from graphlab.graph.samples import build_g1, build_g2, build_g4, build_weighted
from graphlab.log_config import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    log_context,
    unbind_correlation_id,
)


def print_dfs(name: str, starts: list[int]) -> None:
    """Print depth-first orders of a sample graph."""
    graph = build_g1() if name == "g1" else build_g4()
    for start in starts:
        print(f"DFS traversal of {name} starting at {start}: {graph.dfs(start)}")


def print_paths(pairs: list[tuple[int, int]]) -> None:
    """Print reconstructed paths on g1."""
    graph = build_g1()
    for start, stop in pairs:
        result = graph.path(start, stop)
        if result:
            print(f"Path from {start} to {stop}: {result}")
        else:
            print(f"No path from {start} to {stop}")


def main() -> None:
    """Main demonstration function."""
    configure_logging(level="INFO", json_logs=False)
    logger = get_logger(__name__)

    clear_context()
    bind_correlation_id("traversal-demo")
    logger.info("demo_started")

    print_dfs("g1", [0, 2, 3, 4])
    print_paths([(0, 3), (0, 4), (1, 3), (1, 4), (4, 0)])

    print(f"Topological sort of g2: {build_g2().topological_sort()}")
    # g4 contains a cycle, so only its source vertex is ordered
    print(f"Topological sort of g4: {build_g4().topological_sort()}")

    with log_context(graph="weighted"):
        weighted = build_weighted()
        route = weighted.shortest_path(0, 2)
        print(f"Shortest path 0 -> 2: {route} (cost {weighted.path_weight(route)})")

        try:
            weighted.shortest_path(4, 0)
        except NoPathFoundError as e:
            logger.info("expected_failure", error=e.message)

    logger.info("demo_completed")
    unbind_correlation_id()


if __name__ == "__main__":
    main()
