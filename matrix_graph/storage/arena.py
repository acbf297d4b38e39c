"""Slot arena that stores unique node values behind stable integer indices."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple

from matrix_graph.core.errors import DuplicateNodeError, NodeIndexError

_EMPTY: Any = object()


class NodeArena:
    """Indexed set of node values.

    Each node lives in a slot and is addressed by the slot's index. Removing a
    node never shifts other indices; the freed index goes on a stack and is
    handed out again by the next ``add`` (last freed, first reused).

    Duplicate detection and lookup go through a dict keyed by the node value,
    so two distinct values that share a hash are still told apart by ``==``.
    """

    def __init__(self) -> None:
        self._slots: List[Any] = []
        self._index: Dict[Hashable, int] = {}
        self._free: List[int] = []

    def add(self, node: Hashable) -> int:
        """Store ``node`` and return its index.

        Raises:
            DuplicateNodeError: If an equal node is already stored.
        """
        if node in self._index:
            raise DuplicateNodeError(
                f"Node {node!r} already exists at index {self._index[node]}"
            )
        if self._free:
            idx = self._free.pop()
            self._slots[idx] = node
        else:
            idx = len(self._slots)
            self._slots.append(node)
        self._index[node] = idx
        return idx

    def remove(self, index: int) -> Optional[Any]:
        """Free the slot at ``index``. Returns the node, or None if there was none."""
        if not self.is_live(index):
            return None
        node = self._slots[index]
        self._slots[index] = _EMPTY
        del self._index[node]
        self._free.append(index)
        return node

    def get(self, index: int) -> Any:
        """Return the node at ``index``.

        Raises:
            NodeIndexError: If ``index`` is out of range or its slot is empty.
        """
        if not self.is_live(index):
            raise NodeIndexError(f"Node with index {index} not found")
        return self._slots[index]

    def get_checked(self, index: int) -> Optional[Any]:
        """Return the node at ``index``, or None if there is none."""
        if not self.is_live(index):
            return None
        return self._slots[index]

    def contains(self, node: Hashable) -> bool:
        return node in self._index

    def index_of(self, node: Hashable) -> Optional[int]:
        return self._index.get(node)

    def iterate(self) -> Iterator[Any]:
        """Yield live nodes in ascending index order."""
        for _, node in self.items():
            yield node

    def items(self) -> Iterator[Tuple[int, Any]]:
        """Yield ``(index, node)`` pairs for live slots in ascending index order."""
        for idx, node in enumerate(self._slots):
            if node is not _EMPTY:
                yield idx, node

    def length(self) -> int:
        return len(self._slots) - len(self._free)

    @property
    def capacity(self) -> int:
        """Number of slots allocated so far, live or free."""
        return len(self._slots)

    def is_live(self, index: int) -> bool:
        """True if ``index`` refers to a stored node."""
        if not isinstance(index, int) or isinstance(index, bool):
            return False
        return 0 <= index < len(self._slots) and self._slots[index] is not _EMPTY

    # ── Python protocol ──────────────────────────────────────────────

    def __len__(self) -> int:
        return self.length()

    def __iter__(self) -> Iterator[Any]:
        return self.iterate()

    def __contains__(self, node: object) -> bool:
        try:
            return node in self._index
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"NodeArena(nodes={self.length()}, capacity={self.capacity})"
