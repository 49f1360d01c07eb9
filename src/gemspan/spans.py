"""Span and SpanKind definitions.

A span is a typed classification of a half-open range ``[start, end)`` of
the document text. Named groups mark sub-ranges inside it (the ``#`` run of
a heading, the url of a link) for the renderer and outline to read.

Thread Safety:
Span and Group are frozen (immutable) and safe to share across threads.
SpanKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SpanKind(Enum):
    """Kinds of span produced by classification.

    Line kinds come from single-line matchers; block kinds come from the
    fence scanner and describe preformatted blocks.

    """

    # Line kinds
    HEADING = "heading"  # # Title
    ULIST_ITEM = "ulist-item"  # * item
    BLOCKQUOTE = "blockquote"  # > quote
    LINK = "link"  # => url label

    # Block kinds
    FENCE_BEGIN = "fence-begin"  # ```alt
    FENCE_END = "fence-end"  # ```
    PRE_TEXT = "pre-text"  # lines between fences


LINE_KINDS: frozenset[SpanKind] = frozenset(
    {SpanKind.HEADING, SpanKind.ULIST_ITEM, SpanKind.BLOCKQUOTE, SpanKind.LINK}
)

BLOCK_KINDS: frozenset[SpanKind] = frozenset(
    {SpanKind.FENCE_BEGIN, SpanKind.FENCE_END, SpanKind.PRE_TEXT}
)

ALL_KINDS: tuple[SpanKind, ...] = tuple(SpanKind)


@dataclass(frozen=True, slots=True)
class Group:
    """A named sub-range of a span."""

    name: str
    start: int
    end: int

    def text(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Span:
    """A classified range of the document.

    Attributes:
        kind: What the range was classified as
        start: Start offset (inclusive)
        end: End offset (exclusive)
        groups: Named sub-ranges, ordered by start

    """

    kind: SpanKind
    start: int
    end: int
    groups: tuple[Group, ...] = ()

    def group(self, name: str) -> Group | None:
        """Return the group called ``name``, or None if the span has none."""
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def text(self, source: str, name: str | None = None) -> str | None:
        """Return the span text, or one group's text when ``name`` is given.

        Returns None when the named group is absent (e.g. a link without a
        label).
        """
        if name is None:
            return source[self.start : self.end]
        group = self.group(name)
        return group.text(source) if group is not None else None

    def contains(self, pos: int) -> bool:
        return self.start <= pos < self.end

    def overlaps(self, start: int, end: int) -> bool:
        """Check overlap with ``[start, end)``; an empty range tests its point."""
        if start == end:
            return self.start <= start < self.end
        return self.start < end and start < self.end

    def __repr__(self) -> str:
        names = ", ".join(g.name for g in self.groups)
        return f"Span({self.kind.name}, {self.start}:{self.end}, [{names}])"
