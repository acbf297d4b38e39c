"""Exception hierarchy for matrix-graph.

Every error derives from ``MatrixGraphError`` and from the closest builtin,
so callers can catch either ``DuplicateNodeError`` or plain ``ValueError``.
"""

from __future__ import annotations


class MatrixGraphError(Exception):
    """Base class for all library errors."""


class DuplicateNodeError(MatrixGraphError, ValueError):
    """An equal node is already stored."""


class DuplicateEdgeError(MatrixGraphError, ValueError):
    """The (from, to) cell already holds an edge."""


class NodeIndexError(MatrixGraphError, IndexError):
    """An index does not refer to a live node."""


class StaleIteratorError(MatrixGraphError, RuntimeError):
    """The graph was structurally modified while an iterator was alive."""


class TgfParseError(MatrixGraphError, ValueError):
    """Malformed TGF input.

    Attributes:
        line_number: 1-based line in the input, or None if the error
            is not tied to a single line.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class NodeLineError(TgfParseError):
    """A line of the node section could not be parsed."""


class EdgeLineError(TgfParseError):
    """A line of the edge section could not be parsed."""
