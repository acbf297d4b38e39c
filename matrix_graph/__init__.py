"""Matrix Graph: dense directed graphs on an adjacency matrix."""

__version__ = "0.1.0"

from matrix_graph.core.errors import (
    DuplicateEdgeError,
    DuplicateNodeError,
    EdgeLineError,
    MatrixGraphError,
    NodeIndexError,
    NodeLineError,
    StaleIteratorError,
    TgfParseError,
)
from matrix_graph.core.graph import MatrixGraph, NeighborIterator
from matrix_graph.core.models import GraphEntry
from matrix_graph.core.traversal import BreadthFirstTraversal
from matrix_graph.storage.adjacency import GrowthConfig

__all__ = [
    "BreadthFirstTraversal",
    "DuplicateEdgeError",
    "DuplicateNodeError",
    "EdgeLineError",
    "GraphEntry",
    "GrowthConfig",
    "MatrixGraph",
    "MatrixGraphError",
    "NeighborIterator",
    "NodeIndexError",
    "NodeLineError",
    "StaleIteratorError",
    "TgfParseError",
    "__version__",
]
