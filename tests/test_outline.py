"""Tests for OutlineIndex: depth, headings and fold trees."""

from gemspan import classify
from gemspan.outline import FENCED_DEPTH, OutlineEntry, OutlineIndex


def _index(source: str) -> OutlineIndex:
    return OutlineIndex(classify(source), source)


class TestDepth:
    def test_depths_one_two_three(self) -> None:
        source = "# A\n## B\n### C\n"
        index = _index(source)
        assert [index.depth(pos) for pos in (0, 4, 9)] == [1, 2, 3]

    def test_depth_anywhere_on_heading_line(self) -> None:
        index = _index("## Section\n")
        assert index.depth(6) == 2

    def test_plain_line_has_no_depth(self) -> None:
        index = _index("text\n# A\n")
        assert index.depth(1) is None

    def test_pre_text_reports_fenced_depth(self) -> None:
        source = "```\n# not a heading\n```\n"
        index = _index(source)
        assert index.depth(4) == FENCED_DEPTH
        assert FENCED_DEPTH > 3


class TestHeadings:
    def test_headings_in_order(self) -> None:
        source = "# A\ntext\n## B\n"
        assert _index(source).headings() == [
            OutlineEntry(0, 3, 1, "A"),
            OutlineEntry(9, 13, 2, "B"),
        ]

    def test_headings_in_range(self) -> None:
        source = "# A\ntext\n## B\n"
        assert [e.title for e in _index(source).headings(5, 14)] == ["B"]

    def test_fenced_headings_excluded(self) -> None:
        source = "# A\n```\n# B\n```\n# C\n"
        assert [e.title for e in _index(source).headings()] == ["A", "C"]


class TestFoldTree:
    """Fold bodies run to the next heading of equal or shallower depth."""

    def test_nested_tree(self) -> None:
        source = "# A\n## B\nb\n## C\n# D\n"
        roots = _index(source).fold_tree()
        assert [n.entry.title for n in roots] == ["A", "D"]
        a, d = roots
        assert [c.entry.title for c in a.children] == ["B", "C"]
        assert (a.body_start, a.body_end) == (3, 16)
        b, c = a.children
        assert (b.body_start, b.body_end) == (8, 11)
        assert (c.body_start, c.body_end) == (15, 16)
        assert (d.body_start, d.body_end) == (19, len(source))

    def test_deeper_first_heading_is_root(self) -> None:
        source = "## B\n# A\n"
        roots = _index(source).fold_tree()
        assert [n.entry.depth for n in roots] == [2, 1]

    def test_walk_is_depth_first(self) -> None:
        source = "# A\n## B\n### C\n## D\n"
        (root,) = _index(source).fold_tree()
        assert [n.entry.title for n in root.walk()] == ["A", "B", "C", "D"]

    def test_empty_document(self) -> None:
        assert _index("").fold_tree() == []
