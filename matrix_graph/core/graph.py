"""MatrixGraph: the primary public API for matrix-graph."""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, Iterator, Optional, Tuple

from matrix_graph.core.errors import (
    DuplicateEdgeError,
    NodeIndexError,
    StaleIteratorError,
)
from matrix_graph.core.traversal import BreadthFirstTraversal
from matrix_graph.storage.adjacency import AdjacencyStore, GrowthConfig
from matrix_graph.storage.arena import NodeArena

logger = logging.getLogger(__name__)


class MatrixGraph:
    """A directed graph stored as an adjacency matrix.

    Nodes are unique hashable values addressed by integer index. Indices stay
    stable for the lifetime of a node, and the index of a removed node is
    reused by the next ``add_node``. Edges carry an arbitrary payload
    ("weight"); at most one edge exists per ordered pair of nodes.

    Best suited to dense graphs: memory grows with the square of the
    highest node index.

    Example::

        from matrix_graph import MatrixGraph

        graph = MatrixGraph()
        a = graph.add_node("a")
        b = graph.add_node("b")
        graph.add_edge(a, b, 3)
        [entry.node for entry in graph.bfs(a)]   # ["a", "b"]

    Neighbor and breadth-first iterators raise ``StaleIteratorError`` if the
    graph is structurally modified while they are in use.
    """

    def __init__(self, config: Optional[GrowthConfig] = None) -> None:
        """
        Args:
            config: Matrix growth policy. Uses defaults if None.
        """
        self._nodes = NodeArena()
        self._adjacency = AdjacencyStore(config)
        self._edge_count = 0
        self._generation = 0

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Hashable, Hashable, Any]],
        config: Optional[GrowthConfig] = None,
    ) -> "MatrixGraph":
        """Build a graph from ``(from_value, to_value, weight)`` triples.

        Endpoint nodes are created on first sight and reused afterwards.

        Raises:
            DuplicateEdgeError: If the same ``(from, to)`` pair appears twice.
        """
        graph = cls(config=config)
        for source, target, weight in edges:
            from_idx = graph._index_or_add(source)
            to_idx = graph._index_or_add(target)
            graph.add_edge(from_idx, to_idx, weight)
        return graph

    @property
    def generation(self) -> int:
        """Counter bumped on every structural change."""
        return self._generation

    # ── Node operations ──────────────────────────────────────────────

    def add_node(self, node: Hashable) -> int:
        """Add a node and return its index.

        Raises:
            DuplicateNodeError: If an equal node is already in the graph.
        """
        idx = self._nodes.add(node)
        self._adjacency.reserve(idx)
        self._generation += 1
        return idx

    def remove_node(self, node_index: int) -> Optional[Any]:
        """Remove a node and every edge into or out of it.

        Returns the removed node, or None if ``node_index`` is not a node.
        """
        if not self._nodes.is_live(node_index):
            return None

        cleared = 0
        for i, _ in list(self._nodes.items()):
            for row, col in ((i, node_index), (node_index, i)):
                if self._adjacency.contains(row, col):
                    self._adjacency.clear(row, col)
                    cleared += 1
        self._edge_count -= cleared

        node = self._nodes.remove(node_index)
        self._generation += 1
        logger.debug("Removed node %d with %d edge(s)", node_index, cleared)
        return node

    def get_node_by_index(self, node_index: int) -> Optional[Any]:
        """Retrieve a node by index, or None if there is none."""
        return self._nodes.get_checked(node_index)

    def contains_index(self, node_index: int) -> bool:
        """True if ``node_index`` refers to a node of the graph."""
        return self._nodes.is_live(node_index)

    def get_index_of(self, node: Hashable) -> Optional[int]:
        """Return the index of ``node``, or None if not found."""
        return self._nodes.index_of(node)

    def contains_node(self, node: Hashable) -> bool:
        return self._nodes.contains(node)

    def node_count(self) -> int:
        return self._nodes.length()

    def nodes(self) -> Iterator[Tuple[int, Any]]:
        """Yield ``(index, node)`` pairs in ascending index order."""
        return self._nodes.items()

    # ── Edge operations ──────────────────────────────────────────────

    def add_edge(self, from_node: int, to_node: int, weight: Any = None) -> None:
        """Add a directed edge between two existing nodes.

        Raises:
            NodeIndexError: If either endpoint is not a node of the graph.
            DuplicateEdgeError: If the edge already exists.
        """
        missing = [i for i in (from_node, to_node) if not self._nodes.is_live(i)]
        if missing:
            if all(isinstance(i, int) for i in missing):
                missing.sort(reverse=True)
            raise NodeIndexError(
                f"Can't add edge for not existing node with index {missing[0]}"
            )
        if self._adjacency.contains(from_node, to_node):
            raise DuplicateEdgeError(
                f"Edge from {from_node} to {to_node} already exists"
            )
        self._adjacency.set(from_node, to_node, weight)
        self._edge_count += 1
        self._generation += 1

    def remove_edge(self, from_node: int, to_node: int) -> Optional[Any]:
        """Remove an edge. Returns its weight, or None if there was no edge."""
        if not self._adjacency.contains(from_node, to_node):
            return None
        weight = self._adjacency.clear(from_node, to_node)
        self._edge_count -= 1
        self._generation += 1
        return weight

    def get_edge(self, from_node: int, to_node: int) -> Optional[Any]:
        """Return the weight of an edge, or None if there is none."""
        return self._adjacency.get(from_node, to_node)

    def contains_edge(self, from_node: int, to_node: int) -> bool:
        return self._adjacency.contains(from_node, to_node)

    def edge_count(self) -> int:
        return self._edge_count

    def edges(self) -> Iterator[Tuple[int, int, Any]]:
        """Yield ``(from_index, to_index, weight)`` row by row."""
        return self._adjacency.cells()

    # ── Query operations ─────────────────────────────────────────────

    def neighbors(self, node_index: int) -> "NeighborIterator":
        """Return an iterator over the outgoing neighbors of a node.

        Raises:
            NodeIndexError: If ``node_index`` is not a node of the graph.
        """
        if not self._nodes.is_live(node_index):
            raise NodeIndexError(f"Node with index {node_index} not found")
        return NeighborIterator(self, node_index)

    def bfs(self, start: int) -> BreadthFirstTraversal:
        """Breadth-first traversal from ``start``.

        Raises:
            NodeIndexError: If ``start`` is not a node of the graph.
        """
        return BreadthFirstTraversal(self, start)

    def _index_or_add(self, node: Hashable) -> int:
        idx = self._nodes.index_of(node)
        if idx is None:
            idx = self.add_node(node)
        return idx

    # ── Python protocol ──────────────────────────────────────────────

    def __len__(self) -> int:
        return self.node_count()

    def __iter__(self) -> Iterator[Any]:
        return self._nodes.iterate()

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __repr__(self) -> str:
        return (
            f"MatrixGraph(nodes={self.node_count()}, edges={self.edge_count()}, "
            f"capacity={self._adjacency.capacity})"
        )

    def __str__(self) -> str:
        """One line per node in breadth-first order from the first node.

        Ids are 1-based positions in node order, as in the TGF format.
        Nodes unreachable from the first node are not listed.
        """
        first = next(self.nodes(), None)
        if first is None:
            return ""
        positions = {idx: pos for pos, (idx, _) in enumerate(self.nodes(), start=1)}

        lines = []
        for entry in self.bfs(first[0]):
            ids = [str(positions[self.get_index_of(n)]) for n in entry.edges]
            neighs = "[ " + "".join(f"{i} " for i in ids) + "]"
            lines.append(
                f"Id: {positions[self.get_index_of(entry.node)]}, "
                f"neighbors: {neighs}, Value: {entry.node}"
            )
        return "\n".join(lines) + "\n"


class NeighborIterator:
    """Outgoing ``(column_index, node)`` pairs of one row, in column order.

    Nodes are looked up when each pair is produced. Raises
    ``StaleIteratorError`` if the graph changes before the iterator is done.
    """

    def __init__(self, graph: MatrixGraph, row: int) -> None:
        self._graph = graph
        self._row = row
        self._column = 0
        self._generation = graph.generation

    def __iter__(self) -> "NeighborIterator":
        return self

    def __next__(self) -> Tuple[int, Any]:
        graph = self._graph
        if graph.generation != self._generation:
            raise StaleIteratorError(
                f"Graph was modified while iterating neighbors of {self._row}"
            )
        capacity = graph._adjacency.capacity
        while self._column < capacity:
            col = self._column
            self._column += 1
            if graph._adjacency.contains(self._row, col):
                return col, graph._nodes.get(col)
        raise StopIteration
