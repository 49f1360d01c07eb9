"""Fenced block scanner.

Resolves opening fences, closing fences and the preformatted text between
them for one region, writing the results into a SpanStore.

A region may start inside a block opened earlier (carry-in) and a block
opened inside the region may close after it, or never. The scanner writes
what it can resolve inside the region and leaves the rest Open: the
preformatted text is clipped at the region end and the closing fence is
written by whichever later scan covers it.

Thread Safety:
FenceScanner holds no state besides its store and settings; access is
serialized through the store's owner.

"""

from __future__ import annotations

from gemspan.lexer.classifiers import (
    classify_fence_begin,
    classify_fence_end,
    is_closing_fence,
)
from gemspan.lexer.lines import line_end, line_start, next_line
from gemspan.lexer.modes import FENCE_MARKER, FenceState
from gemspan.spans import Span, SpanKind
from gemspan.store import SpanStore


def open_fence_before(store: SpanStore, pos: int) -> Span | None:
    """Nearest opening fence before ``pos`` that is still Open at ``pos``.

    A fence is Open at ``pos`` when no closing fence lies between its
    opening line and ``pos``.
    """
    if pos <= 0:
        return None
    begin = store.previous(SpanKind.FENCE_BEGIN, pos - 1)
    if begin is None:
        return None
    if store.previous(SpanKind.FENCE_END, pos - 1, limit=begin.end) is not None:
        return None
    return begin


def fence_state_at(store: SpanStore, pos: int) -> FenceState:
    """State of the innermost fence governing ``pos``.

    Returns OPEN inside an unclosed block, CLOSED after a resolved block,
    UNOPENED when no fence precedes ``pos``.
    """
    if open_fence_before(store, pos) is not None:
        return FenceState.OPEN
    if pos > 0 and store.previous(SpanKind.FENCE_BEGIN, pos - 1) is not None:
        return FenceState.CLOSED
    return FenceState.UNOPENED


def continues_open_fence(store: SpanStore, pos: int) -> bool:
    """Whether the spans from ``pos`` on were classified inside an open fence.

    Reads the first block span starting at or after ``pos``: preformatted
    text or a closing fence means the text there was inside a block, an
    opening fence (or no block span at all) means it was not.
    """
    first: Span | None = None
    for kind in (SpanKind.FENCE_BEGIN, SpanKind.FENCE_END, SpanKind.PRE_TEXT):
        span = store.following(kind, pos)
        if span is not None and (first is None or span.start < first.start):
            first = span
    return first is not None and first.kind is not SpanKind.FENCE_BEGIN


class FenceScanner:
    """Writes FENCE_BEGIN, PRE_TEXT and FENCE_END spans for a region.

    Usage:
        >>> store = SpanStore(len(source))
        >>> FenceScanner(store).scan(source, 0, len(source))

    Args:
        store: Span store to read carry-in state from and write into
        search_limit: How far past the region end the closing-fence search
            may read (None = to end of buffer)

    """

    __slots__ = ("_store", "_search_limit")

    def __init__(self, store: SpanStore, *, search_limit: int | None = None) -> None:
        self._store = store
        self._search_limit = search_limit

    def scan(self, source: str, start: int, end: int) -> None:
        """Resolve fenced blocks for ``[start, end)``.

        ``start`` must be a line start and the region must already be
        cleared of block spans.
        """
        pos = start

        # Carry-in: a block opened before the region may still be open
        begin = open_fence_before(self._store, start)
        if begin is not None:
            pos = max(self._resolve(source, begin, end), start)

        # New blocks opening inside the region
        while pos < end:
            stop = line_end(source, pos)
            span = classify_fence_begin(source[pos:stop], pos)
            if span is None:
                pos = next_line(source, pos)
                continue
            self._store.set(span.start, span.end, span.kind, span.groups)
            pos = self._resolve(source, span, end)

    def _resolve(self, source: str, begin: Span, end: int) -> int:
        """Write PreText and FenceEnd for ``begin``; return where scanning resumes.

        The preformatted text runs from the line after the opening fence to
        the closing fence line. When the close lies at or past ``end`` (or is
        missing) the text is clipped to ``end`` and the block stays Open.
        A PreText span already starting at ``end`` belongs to the same open
        block and is merged into the clipped one.
        """
        gap_start = next_line(source, begin.start)
        close = self._find_close(source, gap_start, end)

        if close is not None and close < end:
            if gap_start < close:
                self._store.set(gap_start, close, SpanKind.PRE_TEXT)
            stop = line_end(source, close)
            fence_end = classify_fence_end(source[close:stop], close)
            if fence_end is not None:
                self._store.set(fence_end.start, fence_end.end, fence_end.kind, fence_end.groups)
            return next_line(source, close)

        if gap_start < end:
            stop = end
            rest = self._store.following(SpanKind.PRE_TEXT, end)
            if rest is not None and rest.start == end:
                stop = rest.end
            self._store.set(gap_start, stop, SpanKind.PRE_TEXT)
        return end

    def _find_close(self, source: str, pos: int, end: int) -> int | None:
        """Line start of the first closing fence at or after ``pos``, or None."""
        limit = len(source)
        if self._search_limit is not None:
            limit = min(limit, max(end, pos) + self._search_limit)

        while pos < limit:
            found = source.find(FENCE_MARKER, pos, limit)
            if found < 0:
                return None
            start = line_start(source, found)
            stop = line_end(source, found)
            if start >= pos and is_closing_fence(source[start:stop]):
                return start
            pos = stop + 1
        return None
