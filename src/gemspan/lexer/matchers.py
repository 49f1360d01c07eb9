"""Line matchers: one single-line pattern applied over a region.

A matcher walks the lines of a region, skips lines whose start is
suppressed (covered by preformatted text), and yields the spans its
classifier recognizes. Matchers never write to the store themselves.

Example:
    >>> source = "# Title\\n* item\\n"
    >>> list(HEADING_MATCHER.scan(source, 0, len(source)))
    [Span(HEADING, 0:7, [markup, title])]
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from gemspan.lexer.classifiers import (
    classify_blockquote,
    classify_heading,
    classify_link,
    classify_ulist_item,
)
from gemspan.lexer.lines import iter_lines
from gemspan.spans import Span, SpanKind

Classifier = Callable[[str, int], Span | None]
Suppressed = Callable[[int], bool]


@dataclass(frozen=True, slots=True)
class LineMatcher:
    """Applies one classifier to every line of a region.

    Attributes:
        kind: Kind of span the classifier produces
        classify: ``(line, line_start) -> Span | None``
        lead: First character every matching line starts with, used to
            skip lines without slicing them

    """

    kind: SpanKind
    classify: Classifier
    lead: str = ""

    def scan(
        self,
        source: str,
        start: int,
        end: int,
        suppressed: Suppressed | None = None,
    ) -> Iterator[Span]:
        """Yield matches for lines starting in ``[start, end)``.

        Args:
            source: Full document text
            start: Region start (a line start)
            end: Region end
            suppressed: Predicate telling whether a position is inside
                preformatted text; matches starting there are skipped

        Yields:
            Spans of this matcher's kind, in source order.
        """
        lead = self.lead
        for line_start, line_end in iter_lines(source, start, end):
            if lead and not source.startswith(lead, line_start):
                continue
            if suppressed is not None and suppressed(line_start):
                continue
            span = self.classify(source[line_start:line_end], line_start)
            if span is not None:
                yield span


HEADING_MATCHER = LineMatcher(SpanKind.HEADING, classify_heading, "#")
ULIST_MATCHER = LineMatcher(SpanKind.ULIST_ITEM, classify_ulist_item, "*")
BLOCKQUOTE_MATCHER = LineMatcher(SpanKind.BLOCKQUOTE, classify_blockquote, ">")
LINK_MATCHER = LineMatcher(SpanKind.LINK, classify_link, "=>")

LINE_MATCHERS: tuple[LineMatcher, ...] = (
    HEADING_MATCHER,
    ULIST_MATCHER,
    BLOCKQUOTE_MATCHER,
    LINK_MATCHER,
)
