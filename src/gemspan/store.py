"""Edit-aware interval index of classified spans.

The store keeps one list per SpanKind, sorted by start offset. Spans of the
same kind never overlap, so each list is sorted by end offset as well and
every lookup is a bisect.

Offsets are rebased by ``apply_edit`` whenever text changes length, so
spans after an edit keep describing the same text without a rescan.

Thread Safety:
SpanStore is not thread-safe. Document serializes all access with a
per-document lock; standalone users must do the same.

Example:
    >>> store = SpanStore(length=20)
    >>> store.set(0, 5, SpanKind.HEADING, (Group("markup", 0, 1),))
    Span(HEADING, 0:5, [markup])
    >>> store.query(0, 20, SpanKind.HEADING)
    [Span(HEADING, 0:5, [markup])]
"""

from __future__ import annotations

from bisect import bisect_right, insort
from collections.abc import Iterable, Iterator
from heapq import merge
from operator import attrgetter

from gemspan.errors import SpanRangeError
from gemspan.spans import ALL_KINDS, Group, Span, SpanKind

_start = attrgetter("start")
_end = attrgetter("end")


class SpanStore:
    """Interval index over buffer offsets, one sorted list per kind.

    Attributes:
        length: Length of the buffer the offsets refer to

    """

    __slots__ = ("_length", "_spans")

    def __init__(self, length: int = 0) -> None:
        if length < 0:
            raise SpanRangeError("Buffer length must be >= 0", 0, length)
        self._length = length
        self._spans: dict[SpanKind, list[Span]] = {kind: [] for kind in ALL_KINDS}

    @property
    def length(self) -> int:
        return self._length

    # -- writes -------------------------------------------------------------

    def set(
        self,
        start: int,
        end: int,
        kind: SpanKind,
        groups: tuple[Group, ...] = (),
    ) -> Span:
        """Replace every span of ``kind`` touching ``[start, end)`` with one span.

        Args:
            start: Span start offset
            end: Span end offset (must be > start)
            kind: Span kind
            groups: Named sub-ranges, each inside ``[start, end)``

        Returns:
            The stored span.

        Raises:
            SpanRangeError: If the range is empty, inverted, outside the
                buffer, or a group falls outside it.
        """
        self._check_range(start, end)
        if start == end:
            raise SpanRangeError("Spans must not be empty", start, end, self._length)
        for group in groups:
            if not (start <= group.start <= group.end <= end):
                raise SpanRangeError(
                    f"Group '{group.name}' lies outside its span", group.start, group.end
                )

        spans = self._spans[kind]
        lo, hi = self._overlap_slice(spans, start, end)
        del spans[lo:hi]
        span = Span(kind, start, end, tuple(groups))
        insort(spans, span, key=_start)
        return span

    def clear(
        self,
        start: int,
        end: int,
        kinds: Iterable[SpanKind] = ALL_KINDS,
    ) -> int:
        """Remove spans of ``kinds`` lying fully or partially in ``[start, end)``.

        Returns:
            Number of spans removed.
        """
        self._check_range(start, end)
        if start == end:
            return 0
        removed = 0
        for kind in kinds:
            spans = self._spans[kind]
            lo, hi = self._overlap_slice(spans, start, end)
            removed += hi - lo
            del spans[lo:hi]
        return removed

    def apply_edit(self, start: int, old_end: int, new_end: int) -> None:
        """Rebase offsets after ``[start, old_end)`` was replaced by ``[start, new_end)``.

        Offsets before the edit stay put, offsets at or after ``old_end``
        move with the text. Offsets inside deleted text collapse onto the
        edit: span starts move after the inserted text, span ends move before
        it. Spans left empty are dropped.

        Raises:
            SpanRangeError: If the edit does not fit the current buffer.
        """
        self._check_range(start, old_end)
        if new_end < start:
            raise SpanRangeError("Edit end precedes edit start", start, new_end)
        delta = new_end - old_end
        if delta == 0 and start == old_end:
            return

        def map_start(pos: int) -> int:
            if pos < start:
                return pos
            if pos >= old_end:
                return pos + delta
            return new_end

        def map_end(pos: int) -> int:
            if pos <= start:
                return pos
            if pos >= old_end:
                return pos + delta
            return start

        for kind, spans in self._spans.items():
            # Spans ending at or before the edit keep their offsets
            first = bisect_right(spans, start, key=_end)
            rebased: list[Span] = []
            for span in spans[first:]:
                span_start = map_start(span.start)
                span_end = map_end(span.end)
                if span_start >= span_end:
                    continue
                groups = []
                for group in span.groups:
                    group_start = max(map_start(group.start), span_start)
                    group_end = min(map_end(group.end), span_end)
                    if group_start < group_end:
                        groups.append(Group(group.name, group_start, group_end))
                rebased.append(Span(kind, span_start, span_end, tuple(groups)))
            spans[first:] = rebased

        self._length += delta

    # -- reads --------------------------------------------------------------

    def query(self, start: int, end: int, kind: SpanKind) -> list[Span]:
        """Spans of ``kind`` overlapping ``[start, end)``, ordered by start."""
        self._check_range(start, end)
        spans = self._spans[kind]
        lo, hi = self._overlap_slice(spans, start, end)
        return spans[lo:hi]

    def span_at(self, kind: SpanKind, pos: int) -> Span | None:
        """The span of ``kind`` containing ``pos``, if any."""
        spans = self._spans[kind]
        i = bisect_right(spans, pos, key=_end)
        if i < len(spans) and spans[i].start <= pos:
            return spans[i]
        return None

    def covers(self, kind: SpanKind, pos: int) -> bool:
        return self.span_at(kind, pos) is not None

    def previous(self, kind: SpanKind, pos: int, limit: int = 0) -> Span | None:
        """Nearest span of ``kind`` carrying a position in ``[limit, pos]``.

        Scans backward from ``pos`` (inclusive) and gives up at ``limit``.
        """
        if pos < limit:
            return None
        spans = self._spans[kind]
        i = bisect_right(spans, pos, key=_start) - 1
        if i >= 0 and spans[i].end > limit:
            return spans[i]
        return None

    def find_previous_open(self, kind: SpanKind, pos: int, limit: int = 0) -> int | None:
        """Nearest position at or before ``pos`` carrying ``kind``, or None.

        The backward scan stops at ``limit``.
        """
        span = self.previous(kind, pos, limit)
        if span is None:
            return None
        return min(pos, span.end - 1)

    def following(self, kind: SpanKind, pos: int) -> Span | None:
        """First span of ``kind`` starting at or after ``pos``."""
        spans = self._spans[kind]
        i = bisect_right(spans, pos - 1, key=_start)
        return spans[i] if i < len(spans) else None

    def iter_kind(self, kind: SpanKind) -> Iterator[Span]:
        return iter(self._spans[kind])

    @property
    def kinds(self) -> frozenset[SpanKind]:
        """Kinds with at least one span in the store."""
        return frozenset(kind for kind, spans in self._spans.items() if spans)

    def snapshot(self) -> tuple[Span, ...]:
        """Every span in the store, ordered by (start, kind)."""
        return tuple(sorted(self, key=lambda s: (s.start, s.kind.value)))

    def __iter__(self) -> Iterator[Span]:
        return merge(*self._spans.values(), key=_start)

    def __len__(self) -> int:
        return sum(len(spans) for spans in self._spans.values())

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{kind.name}={len(spans)}" for kind, spans in self._spans.items() if spans
        )
        return f"SpanStore(length={self._length}, {counts})"

    # -- helpers ------------------------------------------------------------

    def _check_range(self, start: int, end: int) -> None:
        if start < 0 or end > self._length or start > end:
            raise SpanRangeError("Range outside buffer", start, end, self._length)

    @staticmethod
    def _overlap_slice(spans: list[Span], start: int, end: int) -> tuple[int, int]:
        """Index slice of ``spans`` overlapping ``[start, end)``.

        An empty range selects the span containing its point, if any.
        """
        lo = bisect_right(spans, start, key=_end)
        if start == end:
            if lo < len(spans) and spans[lo].start <= start:
                return lo, lo + 1
            return lo, lo
        hi = lo
        while hi < len(spans) and spans[hi].start < end:
            hi += 1
        return lo, hi
