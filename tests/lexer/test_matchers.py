"""Tests for LineMatcher region scans."""

from gemspan.lexer.matchers import (
    BLOCKQUOTE_MATCHER,
    HEADING_MATCHER,
    LINE_MATCHERS,
    LINK_MATCHER,
    ULIST_MATCHER,
    LineMatcher,
)
from gemspan.spans import Span, SpanKind

SOURCE = "# One\n* item\n> quote\n=> /a A\n## Two\n"


class TestLineMatcher:
    def test_heading_matcher_finds_all_headings(self) -> None:
        spans = list(HEADING_MATCHER.scan(SOURCE, 0, len(SOURCE)))
        assert [s.text(SOURCE, "title") for s in spans] == ["One", "Two"]

    def test_each_matcher_yields_its_kind(self) -> None:
        for matcher in (ULIST_MATCHER, BLOCKQUOTE_MATCHER, LINK_MATCHER):
            spans = list(matcher.scan(SOURCE, 0, len(SOURCE)))
            assert len(spans) == 1
            assert spans[0].kind is matcher.kind

    def test_region_limits_lines(self) -> None:
        # Only "* item" starts inside [6, 13)
        spans = [s for m in LINE_MATCHERS for s in m.scan(SOURCE, 6, 13)]
        assert [s.kind for s in spans] == [SpanKind.ULIST_ITEM]

    def test_suppressed_lines_skipped(self) -> None:
        spans = list(HEADING_MATCHER.scan(SOURCE, 0, len(SOURCE), lambda pos: pos == 0))
        assert [s.text(SOURCE, "title") for s in spans] == ["Two"]

    def test_lead_character_filters_before_classifying(self) -> None:
        calls: list[int] = []

        def classify(line: str, start: int) -> Span | None:
            calls.append(start)
            return None

        matcher = LineMatcher(SpanKind.HEADING, classify, "#")
        list(matcher.scan(SOURCE, 0, len(SOURCE)))
        assert calls == [0, 29]

    def test_matchers_cover_every_line_kind(self) -> None:
        assert {m.kind for m in LINE_MATCHERS} == {
            SpanKind.HEADING,
            SpanKind.ULIST_ITEM,
            SpanKind.BLOCKQUOTE,
            SpanKind.LINK,
        }
