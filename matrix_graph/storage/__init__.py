from matrix_graph.storage.adjacency import AdjacencyStore, GrowthConfig
from matrix_graph.storage.arena import NodeArena

__all__ = ["AdjacencyStore", "GrowthConfig", "NodeArena"]
