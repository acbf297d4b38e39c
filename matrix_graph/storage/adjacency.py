"""Square adjacency matrix of optional edge payloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

_EMPTY: Any = object()


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


@dataclass
class GrowthConfig:
    """Capacity policy for the adjacency matrix.

    Attributes:
        min_capacity: Smallest side length allocated on the first growth.
        initial_capacity: Side length allocated up front. Rounded up to a
            power of two; 0 means allocate lazily on the first edge.
    """

    min_capacity: int = 4
    initial_capacity: int = 0

    def __post_init__(self) -> None:
        if self.min_capacity < 1:
            raise ValueError(
                f"min_capacity must be at least 1, got {self.min_capacity}"
            )
        if self.initial_capacity < 0:
            raise ValueError(
                f"initial_capacity must not be negative, got {self.initial_capacity}"
            )

    def capacity_for(self, index: int) -> int:
        """Side length needed to address ``index``."""
        return _next_power_of_two(max(self.min_capacity, index + 1))


class AdjacencyStore:
    """Directed adjacency matrix keyed by ``(row, col)``.

    Cell ``(row, col)`` holds the payload of the edge from ``row`` to ``col``.
    Any object, ``None`` included, is a valid payload; use ``contains`` to tell
    an empty cell from a ``None`` payload.

    Only ``set`` grows the matrix. Reads and clears outside the current
    capacity behave as if the cell were empty. Capacity never shrinks.
    """

    def __init__(self, config: Optional[GrowthConfig] = None) -> None:
        self._config = config or GrowthConfig()
        self._cells: List[List[Any]] = []
        if self._config.initial_capacity:
            self._grow(_next_power_of_two(self._config.initial_capacity))

    @property
    def capacity(self) -> int:
        return len(self._cells)

    def get(self, row: int, col: int) -> Optional[Any]:
        if not self._in_bounds(row, col):
            return None
        payload = self._cells[row][col]
        return None if payload is _EMPTY else payload

    def contains(self, row: int, col: int) -> bool:
        return self._in_bounds(row, col) and self._cells[row][col] is not _EMPTY

    def set(self, row: int, col: int, payload: Any) -> Optional[Any]:
        """Store ``payload`` at ``(row, col)``, growing if needed. Returns the old payload."""
        if row < 0 or col < 0:
            raise IndexError(f"Negative cell ({row}, {col})")
        self._ensure_capacity(max(row, col))
        previous = self._cells[row][col]
        self._cells[row][col] = payload
        return None if previous is _EMPTY else previous

    def reserve(self, index: int) -> None:
        """Grow so that row and column ``index`` are addressable."""
        if index < 0:
            raise IndexError(f"Negative index {index}")
        self._ensure_capacity(index)

    def clear(self, row: int, col: int) -> Optional[Any]:
        """Empty ``(row, col)``. Returns the old payload, or None."""
        if not self._in_bounds(row, col):
            return None
        previous = self._cells[row][col]
        self._cells[row][col] = _EMPTY
        return None if previous is _EMPTY else previous

    def row(self, index: int) -> Iterator[Tuple[int, Any]]:
        """Yield ``(col, payload)`` for populated cells of one row."""
        if not 0 <= index < len(self._cells):
            return
        for col, payload in enumerate(self._cells[index]):
            if payload is not _EMPTY:
                yield col, payload

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        """Yield ``(row, col, payload)`` for populated cells, row-major."""
        for row in range(len(self._cells)):
            for col, payload in self.row(row):
                yield row, col, payload

    def _in_bounds(self, row: int, col: int) -> bool:
        size = len(self._cells)
        return 0 <= row < size and 0 <= col < size

    def _ensure_capacity(self, index: int) -> None:
        if index < len(self._cells):
            return
        self._grow(self._config.capacity_for(index))

    def _grow(self, new_capacity: int) -> None:
        old_capacity = len(self._cells)
        diff = new_capacity - old_capacity
        for cells in self._cells:
            cells.extend([_EMPTY] * diff)
        self._cells.extend([_EMPTY] * new_capacity for _ in range(diff))
        logger.debug(
            "Grew adjacency matrix from %d to %d", old_capacity, new_capacity
        )

    def __repr__(self) -> str:
        return f"AdjacencyStore(capacity={self.capacity})"
