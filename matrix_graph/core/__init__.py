from matrix_graph.core.graph import MatrixGraph, NeighborIterator
from matrix_graph.core.models import GraphEntry
from matrix_graph.core.traversal import BreadthFirstTraversal, Traversable, Versioned, bfs

__all__ = [
    "BreadthFirstTraversal",
    "GraphEntry",
    "MatrixGraph",
    "NeighborIterator",
    "Traversable",
    "Versioned",
    "bfs",
]
