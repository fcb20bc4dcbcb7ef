"""Graph lab: an in-memory weighted graph with classic traversals.

The package exposes the Graph structure together with its depth-first and
topological iterators, Dijkstra shortest paths, validation and rendering.
"""

from graphlab.graph import (
    CycleDetectedError,
    Edge,
    Graph,
    GraphError,
    InvalidVertexError,
    NegativeWeightError,
    NoPathFoundError,
)

__all__ = [
    "CycleDetectedError",
    "Edge",
    "Graph",
    "GraphError",
    "InvalidVertexError",
    "NegativeWeightError",
    "NoPathFoundError",
]
