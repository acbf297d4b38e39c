"""Value types shared by the graph and its traversals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class GraphEntry:
    """One step of a breadth-first traversal.

    Attributes:
        node: The node being visited.
        edges: Every outgoing neighbor of ``node``, in ascending index order.
            Includes neighbors that were already visited.
    """

    node: Any
    edges: List[Any] = field(default_factory=list)
