"""Tests for TGF graph serialization."""

from collections import Counter

import pytest

from matrix_graph.core.errors import EdgeLineError, NodeLineError, TgfParseError
from matrix_graph.core.graph import MatrixGraph
from matrix_graph.core.serialization import dump_graph, dumps_tgf, load_graph, loads_tgf

_EDGES = [
    (1, 2, 3),
    (3, 4, 7),
    (1, 3, 4),
    (3, 2, 5),
    (5, 2, 7),
    (1, 4, 5),
    (1, 5, 6),
    (3, 1, 4),
]

_TGF = """1 1
2 2
3 3
4 4
5 5
#
1 2 3
1 3 4
1 4 5
1 5 6
3 1 4
3 2 5
3 4 7
5 2 7
"""


def _structure(graph):
    """Multiset of (node, sorted outgoing (target, weight)) independent of indices."""
    result = Counter()
    for idx, node in graph.nodes():
        outgoing = tuple(
            sorted(
                (str(graph.get_node_by_index(to_idx)), str(weight))
                for from_idx, to_idx, weight in graph.edges()
                if from_idx == idx
            )
        )
        result[(str(node), outgoing)] += 1
    return result


class TestDumps:
    def test_matches_expected_text(self):
        g = MatrixGraph.from_edges(_EDGES)
        assert dumps_tgf(g) == _TGF

    def test_empty_graph(self):
        assert dumps_tgf(MatrixGraph()) == "#\n"

    def test_positions_skip_removed_slots(self):
        g = MatrixGraph.from_edges([("a", "b", 1), ("b", "c", 2), ("c", "a", 3)])
        g.remove_node(g.get_index_of("b"))
        assert dumps_tgf(g) == "1 a\n2 c\n#\n2 1 3\n"


class TestLoads:
    def test_parses_nodes_and_edges(self):
        tgf = _TGF.replace("1 1\n", "1 54\n", 1)
        g = loads_tgf(tgf, node_type=int, weight_type=int)
        expected = [(54 if s == 1 else s, 54 if t == 1 else t, w) for s, t, w in _EDGES]
        for source, target, weight in expected:
            from_idx = g.get_index_of(source)
            to_idx = g.get_index_of(target)
            assert g.get_edge(from_idx, to_idx) == weight
        assert g.edge_count() == len(_EDGES)

    def test_default_types_are_strings(self):
        g = loads_tgf("1 hello world\n2 b\n#\n1 2 heavy edge\n")
        assert g.get_index_of("hello world") == 0
        assert g.get_edge(0, 1) == "heavy edge"

    def test_no_edges(self):
        g = loads_tgf("1 a\n#\n")
        assert g.node_count() == 1
        assert g.edge_count() == 0

    def test_carriage_returns(self):
        g = loads_tgf("1 1\r2 2\r#\r1 2 9", node_type=int, weight_type=int)
        assert g.get_edge(0, 1) == 9

    def test_none_weight_reads_back_as_text(self):
        g = MatrixGraph()
        a, b = g.add_node("a"), g.add_node("b")
        g.add_edge(a, b)
        text = dumps_tgf(g)
        assert text == "1 a\n2 b\n#\n1 2 None\n"
        assert loads_tgf(text).get_edge(0, 1) == "None"

        def weight_or_none(raw):
            return None if raw == "None" else raw

        restored = loads_tgf(text, weight_type=weight_or_none)
        assert restored.contains_edge(0, 1)
        assert restored.get_edge(0, 1) is None

    def test_blank_lines_skipped(self):
        g = loads_tgf("1 a\n\n2 b\n#\n\n1 2 x\n\n")
        assert g.node_count() == 2
        assert g.edge_count() == 1


class TestParseErrors:
    def test_wrong_node_value(self):
        with pytest.raises(NodeLineError, match="line 1"):
            loads_tgf("1 ok\n2 3\n#", node_type=int)

    def test_bad_node_value_among_carriage_returns(self):
        with pytest.raises(NodeLineError):
            loads_tgf("1 Some bad value\r2 3\r#", node_type=int)

    def test_node_line_without_separator(self):
        with pytest.raises(NodeLineError, match="missing value"):
            loads_tgf("1\n#\n")

    def test_missing_delimiter(self):
        with pytest.raises(NodeLineError, match="delimiter"):
            loads_tgf("1 a\n2 b\n")

    def test_duplicate_node_value(self):
        with pytest.raises(NodeLineError, match="line 2"):
            loads_tgf("1 a\n2 a\n#\n")

    def test_wrong_edge_value(self):
        with pytest.raises(EdgeLineError, match="line 4"):
            loads_tgf("1 2\n2 3\n#\nWrong value", node_type=int, weight_type=int)

    def test_edge_index_not_a_number(self):
        with pytest.raises(EdgeLineError, match="wrong edge index"):
            loads_tgf("1 a\n#\nx 1 5\n")

    def test_edge_weight_unparseable(self):
        with pytest.raises(EdgeLineError, match="wrong edge weight"):
            loads_tgf("1 a\n2 b\n#\n1 2 heavy\n", weight_type=float)

    def test_edge_to_missing_node(self):
        with pytest.raises(EdgeLineError, match="index 4"):
            loads_tgf("1 a\n2 b\n#\n1 5 1\n")

    def test_edge_with_zero_id(self):
        with pytest.raises(EdgeLineError):
            loads_tgf("1 a\n#\n0 1 1\n")

    def test_duplicate_edge(self):
        with pytest.raises(EdgeLineError):
            loads_tgf("1 a\n2 b\n#\n1 2 x\n1 2 y\n")

    def test_errors_share_base(self):
        with pytest.raises(TgfParseError):
            loads_tgf("1 a\n#\nbroken\n")
        with pytest.raises(ValueError):
            loads_tgf("no-delimiter")


class TestRoundTrip:
    def test_structure_preserved(self):
        original = MatrixGraph.from_edges(_EDGES)
        restored = loads_tgf(dumps_tgf(original), node_type=int, weight_type=int)
        assert _structure(restored) == _structure(original)

    def test_structure_preserved_after_removal(self):
        original = MatrixGraph.from_edges(_EDGES)
        original.remove_node(original.get_index_of(3))
        original.add_node(99)
        restored = loads_tgf(dumps_tgf(original), node_type=int, weight_type=int)
        assert restored.node_count() == original.node_count()
        assert restored.edge_count() == original.edge_count()
        assert _structure(restored) == _structure(original)

    def test_file_roundtrip(self, tmp_path):
        original = MatrixGraph.from_edges([("x", "y", 0.5), ("y", "z", 1.5)])
        path = tmp_path / "graph.tgf"
        dump_graph(original, path)
        assert path.exists()

        restored = load_graph(path, weight_type=float)
        assert restored.get_edge(restored.get_index_of("x"), restored.get_index_of("y")) == 0.5
        assert restored.get_edge(restored.get_index_of("y"), restored.get_index_of("z")) == 1.5

    def test_file_is_plain_text(self, tmp_path):
        path = tmp_path / "out.tgf"
        dump_graph(MatrixGraph.from_edges([("a", "b", 1)]), path)
        assert path.read_text(encoding="utf-8") == "1 a\n2 b\n#\n1 2 1\n"
