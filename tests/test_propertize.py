"""Tests for Propertizer: clear-then-recompute over a region."""

import logging

import pytest

from gemspan import classify
from gemspan.errors import SpanRangeError
from gemspan.propertize import Propertizer
from gemspan.spans import SpanKind
from gemspan.store import SpanStore


def _kinds(store: SpanStore) -> list[tuple[SpanKind, int, int]]:
    return [(s.kind, s.start, s.end) for s in store.snapshot()]


class TestPropertize:
    """Whole-document and region classification."""

    def test_outline_example(self) -> None:
        source = "# A\n## B\n### C\n"
        store = classify(source)
        headings = store.query(0, store.length, SpanKind.HEADING)
        assert [s.text(source, "markup") for s in headings] == ["#", "##", "###"]

    def test_fence_suppresses_heading(self) -> None:
        source = "```\n# not a heading\n```\n"
        store = classify(source)
        assert store.query(0, store.length, SpanKind.HEADING) == []
        (pre,) = store.query(0, store.length, SpanKind.PRE_TEXT)
        assert pre.text(source) == "# not a heading\n"

    def test_fence_suppresses_every_line_kind(self) -> None:
        source = "```\n* a\n> b\n=> c\n```\n"
        store = classify(source)
        assert store.kinds == {SpanKind.FENCE_BEGIN, SpanKind.PRE_TEXT, SpanKind.FENCE_END}

    def test_link_example(self) -> None:
        source = "=> gemini://example.org Example page\n"
        store = classify(source)
        (link,) = store.query(0, store.length, SpanKind.LINK)
        assert link.text(source, "url") == "gemini://example.org"
        assert link.text(source, "label") == " Example page"

    def test_mixed_document(self) -> None:
        source = "# T\n\n* i\n> q\n=> u\n```\nx\n```\n"
        store = classify(source)
        assert [k for k, _, _ in _kinds(store)] == [
            SpanKind.HEADING,
            SpanKind.ULIST_ITEM,
            SpanKind.BLOCKQUOTE,
            SpanKind.LINK,
            SpanKind.FENCE_BEGIN,
            SpanKind.PRE_TEXT,
            SpanKind.FENCE_END,
        ]

    def test_returns_snapped_region(self) -> None:
        source = "# A\n# B\n# C\n"
        store = SpanStore(len(source))
        assert Propertizer(store).propertize(source, 5, 6) == (4, 8)
        assert len(store.query(0, store.length, SpanKind.HEADING)) == 1

    def test_region_clears_stale_spans(self) -> None:
        source = "# A\nplain\n"
        store = SpanStore(len(source))
        store.set(4, 9, SpanKind.HEADING)
        Propertizer(store).propertize(source, 0, len(source))
        assert _kinds(store) == [(SpanKind.HEADING, 0, 3)]

    def test_idempotent(self) -> None:
        source = "# A\n```py\n# x\n```\n=> a b\n"
        store = classify(source)
        before = store.snapshot()
        Propertizer(store).propertize(source, 0, len(source))
        assert store.snapshot() == before

    def test_empty_document(self) -> None:
        store = classify("")
        assert len(store) == 0

    def test_length_mismatch_rejected(self) -> None:
        with pytest.raises(SpanRangeError):
            Propertizer(SpanStore(3)).propertize("abcd", 0, 4)

    def test_range_outside_source_rejected(self) -> None:
        with pytest.raises(SpanRangeError):
            Propertizer(SpanStore(4)).propertize("abcd", 2, 9)

    def test_logs_region_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="gemspan"):
            classify("# A\n")
        assert any("Propertized [0, 4)" in r.getMessage() for r in caplog.records)
