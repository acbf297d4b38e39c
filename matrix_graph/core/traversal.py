"""Breadth-first traversal over any graph that can list neighbors by index.

The traversal only needs three capabilities from a graph, described by the
``Traversable`` protocol:

- ``neighbors(index)`` yields ``(neighbor_index, neighbor_node)`` pairs,
- ``get_node_by_index(index)`` returns the node,
- ``contains_index(index)`` tells whether an index holds a node, since a
  stored node may itself be ``None``.

A graph that also exposes an integer ``generation`` (``Versioned``) gets
mutation detection: the traversal raises ``StaleIteratorError`` if the
generation moves while it is still running.
"""

from __future__ import annotations

from collections import deque
from typing import (
    Any,
    Deque,
    Iterable,
    Iterator,
    Optional,
    Protocol,
    Set,
    Tuple,
    runtime_checkable,
)

from matrix_graph.core.errors import NodeIndexError, StaleIteratorError
from matrix_graph.core.models import GraphEntry


class Traversable(Protocol):
    def neighbors(self, index: int) -> Iterable[Tuple[int, Any]]:
        ...

    def get_node_by_index(self, index: int) -> Optional[Any]:
        ...

    def contains_index(self, index: int) -> bool:
        ...


@runtime_checkable
class Versioned(Protocol):
    @property
    def generation(self) -> int:
        ...


class BreadthFirstTraversal:
    """Lazy breadth-first walk starting from ``start``.

    Yields one ``GraphEntry`` per reachable node, layer by layer, each node
    exactly once. Neighbors are discovered in the order ``neighbors`` yields
    them. Takes O(n + e) time and O(n) extra space.

    Raises:
        NodeIndexError: If ``start`` is not a node of ``graph``.
    """

    def __init__(self, graph: Traversable, start: int) -> None:
        if not graph.contains_index(start):
            raise NodeIndexError(f"Node with index {start} not found")
        self._graph = graph
        self._visited: Set[int] = set()
        self._queue: Deque[int] = deque([start])
        self._generation = self._current_generation()

    def __iter__(self) -> Iterator[GraphEntry]:
        return self

    def __next__(self) -> GraphEntry:
        if not self._queue:
            raise StopIteration
        self._check_generation()

        cur = self._queue.popleft()
        self._visited.add(cur)

        neighbors = list(self._graph.neighbors(cur))
        for idx, _ in neighbors:
            if idx not in self._visited:
                self._visited.add(idx)
                self._queue.append(idx)

        return GraphEntry(
            node=self._graph.get_node_by_index(cur),
            edges=[node for _, node in neighbors],
        )

    def _current_generation(self) -> Optional[int]:
        if isinstance(self._graph, Versioned):
            return self._graph.generation
        return None

    def _check_generation(self) -> None:
        if self._current_generation() != self._generation:
            raise StaleIteratorError(
                "Graph was modified during breadth-first traversal"
            )


def bfs(graph: Traversable, start: int) -> BreadthFirstTraversal:
    """Shortcut for ``BreadthFirstTraversal(graph, start)``."""
    return BreadthFirstTraversal(graph, start)
