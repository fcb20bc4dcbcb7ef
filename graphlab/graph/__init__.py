"""Graph module: adjacency-list graph, traversals, validation and samples.

This module provides the Graph structure over integer vertices together with
its depth-first and topological iterators and the GraphValidator.
"""

from graphlab.graph.graph import (
    CycleDetectedError,
    Edge,
    Graph,
    GraphError,
    InvalidVertexError,
    NegativeWeightError,
    NoPathFoundError,
)
from graphlab.graph.traversal import DepthFirstIterator, TopologicalIterator
from graphlab.graph.validator import GraphValidator, ValidationReport

__all__ = [
    "CycleDetectedError",
    "DepthFirstIterator",
    "Edge",
    "Graph",
    "GraphError",
    "GraphValidator",
    "InvalidVertexError",
    "NegativeWeightError",
    "NoPathFoundError",
    "TopologicalIterator",
    "ValidationReport",
]
