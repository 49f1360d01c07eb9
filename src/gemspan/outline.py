"""Outline depth and fold trees derived from heading spans.

Depth is read straight from the span store: a heading's depth is the
length of its ``#`` run. Positions inside preformatted text report
FENCED_DEPTH, deeper than any heading, so a ``# comment`` line in a code
block never becomes an outline node.

Fold trees are built on demand and thrown away; nothing is kept in sync
with edits beyond the spans themselves.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from gemspan.lexer.modes import MAX_HEADING_LEVEL
from gemspan.spans import SpanKind
from gemspan.store import SpanStore

# Reported for positions inside preformatted text
FENCED_DEPTH = 1000


@dataclass(frozen=True, slots=True)
class OutlineEntry:
    """One heading in the outline.

    Attributes:
        position: Offset where the heading line starts
        end: Offset where the heading line ends
        depth: Heading level (1-3)
        title: Heading title text

    """

    position: int
    end: int
    depth: int
    title: str


@dataclass(slots=True)
class FoldNode:
    """A heading and the region its fold hides.

    Attributes:
        entry: The heading
        body_start: Start of the foldable body (end of the heading line)
        body_end: Start of the next heading of equal or shallower depth,
            or the end of the outlined range
        children: Deeper headings inside the body

    """

    entry: OutlineEntry
    body_start: int
    body_end: int
    children: list[FoldNode] = field(default_factory=list)

    def walk(self) -> Iterator[FoldNode]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class OutlineIndex:
    """Read-only outline queries over a span store.

    Args:
        store: Span store describing ``source``
        source: Document text (for heading titles)

    """

    __slots__ = ("_store", "_source")

    def __init__(self, store: SpanStore, source: str) -> None:
        self._store = store
        self._source = source

    def depth(self, pos: int) -> int | None:
        """Outline depth at ``pos``.

        Returns:
            FENCED_DEPTH inside preformatted text, the heading level on a
            heading line, None otherwise.
        """
        if self._store.covers(SpanKind.PRE_TEXT, pos):
            return FENCED_DEPTH
        heading = self._store.span_at(SpanKind.HEADING, pos)
        if heading is None:
            return None
        markup = heading.group("markup")
        if markup is None:
            return None
        return min(markup.end - markup.start, MAX_HEADING_LEVEL)

    def headings(self, start: int = 0, end: int | None = None) -> list[OutlineEntry]:
        """Headings overlapping ``[start, end)`` in document order."""
        if end is None:
            end = self._store.length
        entries = []
        for span in self._store.query(start, end, SpanKind.HEADING):
            depth = self.depth(span.start)
            if depth is None or depth == FENCED_DEPTH:
                continue
            entries.append(
                OutlineEntry(span.start, span.end, depth, span.text(self._source, "title") or "")
            )
        return entries

    def fold_tree(self, start: int = 0, end: int | None = None) -> list[FoldNode]:
        """Build the fold forest for ``[start, end)``.

        Each heading's body runs from the end of its line to the next
        heading of equal or shallower depth; deeper headings nest inside.
        """
        if end is None:
            end = self._store.length

        roots: list[FoldNode] = []
        stack: list[FoldNode] = []
        for entry in self.headings(start, end):
            while stack and stack[-1].entry.depth >= entry.depth:
                stack.pop().body_end = entry.position
            node = FoldNode(entry, entry.end, end)
            if stack:
                stack[-1].children.append(node)
            else:
                roots.append(node)
            stack.append(node)

        return roots
