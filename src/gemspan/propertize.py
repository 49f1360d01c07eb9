"""Region (re)classification.

``Propertizer.propertize`` is the only writer of spans. For a region it:

1. Widens the region to whole lines.
2. Clears every span kind inside it.
3. Runs the fence scanner, so preformatted coverage is final.
4. Runs each line matcher, skipping lines inside preformatted text.

Running it twice over unchanged text leaves the store unchanged.

Thread Safety:
Not thread-safe; Document serializes calls per buffer.

"""

from __future__ import annotations

from functools import partial

from gemspan.errors import SpanRangeError
from gemspan.lexer.lines import snap_region
from gemspan.lexer.matchers import LINE_MATCHERS, LineMatcher
from gemspan.lexer.scanner import FenceScanner
from gemspan.spans import SpanKind
from gemspan.store import SpanStore
from gemspan.utils.logger import get_logger

logger = get_logger(__name__)


class Propertizer:
    """Clears and recomputes spans for a region of the document.

    Args:
        store: Span store to write into
        matchers: Line matchers to run after fence scanning
        fence_search_limit: Passed to FenceScanner as its search limit

    """

    __slots__ = ("_store", "_scanner", "_matchers")

    def __init__(
        self,
        store: SpanStore,
        *,
        matchers: tuple[LineMatcher, ...] = LINE_MATCHERS,
        fence_search_limit: int | None = None,
    ) -> None:
        self._store = store
        self._scanner = FenceScanner(store, search_limit=fence_search_limit)
        self._matchers = matchers

    @property
    def store(self) -> SpanStore:
        return self._store

    def propertize(self, source: str, start: int, end: int) -> tuple[int, int]:
        """Reclassify ``[start, end)`` of ``source``.

        Args:
            source: Full document text; its length must match the store
            start: Region start offset
            end: Region end offset

        Returns:
            The whole-line region that was actually reclassified.

        Raises:
            SpanRangeError: If the region lies outside the buffer or the
                store describes a buffer of a different length.
        """
        if len(source) != self._store.length:
            raise SpanRangeError(
                "Source length does not match span store", 0, len(source), self._store.length
            )
        if start < 0 or end > len(source) or start > end:
            raise SpanRangeError("Range outside buffer", start, end, len(source))

        start, end = snap_region(source, start, end)
        removed = self._store.clear(start, end)
        if start == end:
            return start, end

        self._scanner.scan(source, start, end)

        suppressed = partial(self._store.covers, SpanKind.PRE_TEXT)
        written = 0
        for matcher in self._matchers:
            for span in matcher.scan(source, start, end, suppressed):
                self._store.set(span.start, span.end, span.kind, span.groups)
                written += 1

        logger.debug(
            "Propertized [%d, %d): cleared %d spans, wrote %d line spans",
            start,
            end,
            removed,
            written,
        )
        return start, end
