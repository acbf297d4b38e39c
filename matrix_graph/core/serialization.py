"""TGF (trivial graph format) export and import.

Format::

    1 first-node
    2 second-node
    #
    1 2 edge-weight

Node ids are 1-based positions in node order. Values and weights are written
with ``str()`` and read back with caller-supplied converters (default ``str``).
A ``None`` weight, the ``add_edge`` default, is written as ``None`` and reads
back as the string ``"None"`` unless ``weight_type`` maps it back.

Usage::

    from matrix_graph.core.serialization import dump_graph, load_graph

    # Export
    dump_graph(graph, "my_graph.tgf")

    # Import
    graph = load_graph("my_graph.tgf", node_type=int, weight_type=float)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from matrix_graph.core.errors import (
    DuplicateEdgeError,
    DuplicateNodeError,
    EdgeLineError,
    NodeIndexError,
    NodeLineError,
)
from matrix_graph.core.graph import MatrixGraph
from matrix_graph.storage.adjacency import GrowthConfig

logger = logging.getLogger(__name__)

DELIMITER = "#"

Converter = Callable[[str], Any]


def dumps_tgf(graph: MatrixGraph) -> str:
    """Render a graph as TGF text."""
    positions: Dict[int, int] = {}
    lines: List[str] = []

    for pos, (idx, node) in enumerate(graph.nodes(), start=1):
        positions[idx] = pos
        lines.append(f"{pos} {node}")
    lines.append(DELIMITER)
    for from_idx, to_idx, weight in graph.edges():
        lines.append(f"{positions[from_idx]} {positions[to_idx]} {weight}")

    return "\n".join(lines) + "\n"


def _parse_node(line: str, line_number: int, node_type: Converter) -> Any:
    _, sep, raw = line.partition(" ")
    if not sep:
        raise NodeLineError(f"missing value in node line {line!r}", line_number)
    try:
        return node_type(raw)
    except (TypeError, ValueError) as exc:
        raise NodeLineError(f"wrong node value {raw!r}", line_number) from exc


def _parse_edge(
    line: str, line_number: int, weight_type: Converter
) -> Tuple[int, int, Any]:
    parts = line.split(" ", 2)
    if len(parts) < 3:
        raise EdgeLineError(f"expected 'from to weight', got {line!r}", line_number)
    raw_from, raw_to, raw_weight = parts
    try:
        from_idx = int(raw_from) - 1
        to_idx = int(raw_to) - 1
    except ValueError as exc:
        raise EdgeLineError(f"wrong edge index in {line!r}", line_number) from exc
    try:
        weight = weight_type(raw_weight)
    except (TypeError, ValueError) as exc:
        raise EdgeLineError(f"wrong edge weight {raw_weight!r}", line_number) from exc
    return from_idx, to_idx, weight


def loads_tgf(
    text: str,
    node_type: Converter = str,
    weight_type: Converter = str,
    config: Optional[GrowthConfig] = None,
) -> MatrixGraph:
    """Parse TGF text into a new graph.

    Nodes get fresh indices in file order; the id column of node lines is
    not interpreted. Blank lines are skipped.

    Args:
        text: TGF document.
        node_type: Converts the text of a node value, e.g. ``int``.
        weight_type: Converts the text of an edge weight.
        config: Growth policy for the new graph.

    Raises:
        NodeLineError: A node line is malformed, repeats a value, or the
            ``#`` delimiter is missing.
        EdgeLineError: An edge line is malformed, names a missing node, or
            repeats an edge.
    """
    graph = MatrixGraph(config=config)
    lines = iter(enumerate(text.splitlines(), start=1))

    for line_number, line in lines:
        if line.strip() == DELIMITER:
            break
        if not line.strip():
            continue
        node = _parse_node(line, line_number, node_type)
        try:
            graph.add_node(node)
        except DuplicateNodeError as exc:
            raise NodeLineError(str(exc), line_number) from exc
    else:
        raise NodeLineError(f"missing {DELIMITER!r} delimiter line")

    for line_number, line in lines:
        if not line.strip():
            continue
        from_idx, to_idx, weight = _parse_edge(line, line_number, weight_type)
        try:
            graph.add_edge(from_idx, to_idx, weight)
        except (NodeIndexError, DuplicateEdgeError) as exc:
            raise EdgeLineError(str(exc), line_number) from exc

    logger.debug(
        "Parsed TGF graph with %d node(s) and %d edge(s)",
        graph.node_count(),
        graph.edge_count(),
    )
    return graph


def dump_graph(graph: MatrixGraph, path: Union[str, Path]) -> None:
    """Write a graph to a TGF file.

    Args:
        graph: A ``MatrixGraph`` instance.
        path: File path to write to.
    """
    Path(path).write_text(dumps_tgf(graph), encoding="utf-8")


def load_graph(
    path: Union[str, Path],
    node_type: Converter = str,
    weight_type: Converter = str,
    config: Optional[GrowthConfig] = None,
) -> MatrixGraph:
    """Load a graph from a TGF file previously written by ``dump_graph``."""
    return loads_tgf(
        Path(path).read_text(encoding="utf-8"),
        node_type=node_type,
        weight_type=weight_type,
        config=config,
    )
