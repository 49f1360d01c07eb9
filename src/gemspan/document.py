"""Document: text, spans and the dirty-region queue behind one lock.

A host drives a Document with two kinds of call:

- Edits (``replace`` or ``notify_edit``) update the text, rebase existing
  spans and queue the edited range. They do no classification.
- ``drain`` empties the queue: each range is extended to a fixed point,
  merged with any queued range it reached, and propertized once.

Queries (highlights, outline, fenced blocks, links) drain first, so they
always read spans for the current text.

When draining a region changes whether a fence is open at its end, the
rest of the document is queued too: every fence after that point now
pairs differently.

Thread Safety:
All public methods take the document's lock. Writers are serialized and
readers only see fully committed regions. Highlights returned by
``highlights`` capture their spans under the lock and can be iterated
afterwards without it.

Example:
    >>> doc = Document("# Title\\n\\n# Other\\n")
    >>> [e.title for e in doc.headings()]
    ['Title', 'Other']
    >>> doc.replace(0, 0, "```\\n")
    >>> doc.headings()
    []
"""

from __future__ import annotations

import threading
from collections import deque

from gemspan.config import DEFAULT_CONFIG, EngineConfig
from gemspan.errors import SpanRangeError
from gemspan.fences import FenceBlock, FenceHandler, fence_block_at, fence_blocks
from gemspan.lexer.modes import FenceState
from gemspan.lexer.scanner import continues_open_fence, fence_state_at
from gemspan.links import LinkTarget
from gemspan.outline import FoldNode, OutlineEntry, OutlineIndex
from gemspan.propertize import Propertizer
from gemspan.region import extend_to_fixed_point
from gemspan.render import HighlightRenderer, Highlights
from gemspan.spans import Span, SpanKind
from gemspan.store import SpanStore
from gemspan.utils.logger import get_logger

logger = get_logger(__name__)


class Document:
    """Incrementally classified Gemtext document.

    Args:
        text: Initial document text
        config: Engine configuration (defaults to EngineConfig())

    """

    __slots__ = ("_text", "_config", "_store", "_propertizer", "_renderer", "_dirty", "_lock")

    def __init__(self, text: str = "", *, config: EngineConfig | None = None) -> None:
        self._text = text
        self._config = config or DEFAULT_CONFIG
        self._store = SpanStore(len(text))
        self._propertizer = Propertizer(
            self._store, fence_search_limit=self._config.fence_search_limit
        )
        self._renderer = HighlightRenderer(self._config)
        self._dirty: deque[tuple[int, int]] = deque()
        self._lock = threading.RLock()
        if text:
            self._dirty.append((0, len(text)))

    @property
    def text(self) -> str:
        return self._text

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def store(self) -> SpanStore:
        """The span store. Call ``drain`` first to see current spans."""
        return self._store

    @property
    def pending(self) -> int:
        """Number of queued ranges awaiting classification."""
        with self._lock:
            return len(self._dirty)

    # -- edits --------------------------------------------------------------

    def replace(self, start: int, end: int, new_text: str) -> None:
        """Replace ``text[start:end]`` with ``new_text``.

        Raises:
            SpanRangeError: If the range lies outside the document.
        """
        with self._lock:
            if start < 0 or end > len(self._text) or start > end:
                raise SpanRangeError("Edit outside document", start, end, len(self._text))
            text = self._text[:start] + new_text + self._text[end:]
            self.notify_edit(start, end, start + len(new_text), text)

    def insert(self, pos: int, new_text: str) -> None:
        self.replace(pos, pos, new_text)

    def delete(self, start: int, end: int) -> None:
        self.replace(start, end, "")

    def notify_edit(
        self,
        edit_start: int,
        edit_end_before: int,
        edit_end_after: int,
        text: str,
    ) -> None:
        """Record an edit made by a host that owns the buffer.

        Args:
            edit_start: Offset where the edit begins
            edit_end_before: End of the replaced text in the old buffer
            edit_end_after: End of the replacement text in the new buffer
            text: The complete buffer text after the edit

        Raises:
            SpanRangeError: If the offsets do not fit the old buffer or the
                new text has the wrong length.
        """
        with self._lock:
            old_length = len(self._text)
            if (
                edit_start < 0
                or edit_end_before > old_length
                or edit_start > edit_end_before
                or edit_end_after < edit_start
            ):
                raise SpanRangeError(
                    "Edit outside document", edit_start, edit_end_before, old_length
                )
            expected = old_length + edit_end_after - edit_end_before
            if len(text) != expected:
                raise SpanRangeError(
                    f"New text has length {len(text)}, expected {expected}",
                    edit_start,
                    edit_end_after,
                    old_length,
                )

            self._store.apply_edit(edit_start, edit_end_before, edit_end_after)
            self._rebase_dirty(edit_start, edit_end_before, edit_end_after)
            self._text = text
            # The line starting at the edit end may have changed too
            self._dirty.append((edit_start, min(edit_end_after + 1, len(text))))

    def _rebase_dirty(self, start: int, old_end: int, new_end: int) -> None:
        delta = new_end - old_end

        def move(pos: int) -> int:
            if pos <= start:
                return pos
            if pos >= old_end:
                return pos + delta
            return new_end

        self._dirty = deque((move(s), move(e)) for s, e in self._dirty)

    # -- classification -----------------------------------------------------

    def drain(self) -> int:
        """Classify every queued range.

        Returns:
            Number of regions propertized.
        """
        with self._lock:
            count = 0
            while self._dirty:
                start, end = self._next_region()
                start, end = self._propertizer.propertize(self._text, start, end)
                count += 1

                if end >= len(self._text):
                    continue
                # Spans after the region were classified under the old state
                open_before = continues_open_fence(self._store, end)
                open_after = fence_state_at(self._store, end) is FenceState.OPEN
                if open_before != open_after:
                    logger.debug(
                        "Fence state changed at %d; requeueing [%d, %d)",
                        end,
                        end,
                        len(self._text),
                    )
                    self._dirty.append((end, len(self._text)))

            return count

    def _next_region(self) -> tuple[int, int]:
        """Pop a queued range, extend it and absorb the queued ranges it reaches."""
        start, end = self._dirty.popleft()
        size = len(self._text)
        start, end = min(max(start, 0), size), min(max(end, 0), size)
        start, end = extend_to_fixed_point(self._text, self._store, start, end)

        merged = True
        while merged:
            merged = False
            for other in list(self._dirty):
                if other[0] <= end and other[1] >= start:
                    self._dirty.remove(other)
                    start, end = min(start, other[0]), max(end, other[1])
                    merged = True
            if merged:
                start, end = extend_to_fixed_point(self._text, self._store, start, end)
        return start, end

    def propertize(self, start: int = 0, end: int | None = None) -> tuple[int, int]:
        """Reclassify ``[start, end)`` directly, bypassing region extension."""
        with self._lock:
            if end is None:
                end = len(self._text)
            return self._propertizer.propertize(self._text, start, end)

    # -- queries ------------------------------------------------------------

    def spans(self, kind: SpanKind, start: int = 0, end: int | None = None) -> list[Span]:
        with self._lock:
            self.drain()
            return self._store.query(start, len(self._text) if end is None else end, kind)

    def highlights(self, start: int = 0, end: int | None = None) -> Highlights:
        """Style runs for the viewport ``[start, end)``."""
        with self._lock:
            self.drain()
            if end is None:
                end = len(self._text)
            return self._renderer.render(self._store, start, end)

    def depth(self, pos: int) -> int | None:
        with self._lock:
            self.drain()
            return OutlineIndex(self._store, self._text).depth(pos)

    def headings(self, start: int = 0, end: int | None = None) -> list[OutlineEntry]:
        with self._lock:
            self.drain()
            return OutlineIndex(self._store, self._text).headings(start, end)

    def fold_tree(self, start: int = 0, end: int | None = None) -> list[FoldNode]:
        with self._lock:
            self.drain()
            return OutlineIndex(self._store, self._text).fold_tree(start, end)

    def fence_blocks(self, start: int = 0, end: int | None = None) -> list[FenceBlock]:
        with self._lock:
            self.drain()
            return fence_blocks(
                self._store, self._text, start, len(self._text) if end is None else end
            )

    def fence_block_at(self, pos: int) -> FenceBlock | None:
        with self._lock:
            self.drain()
            return fence_block_at(self._store, self._text, pos)

    def fence_handler_at(self, pos: int) -> FenceHandler | None:
        """Registered handler for the block at ``pos`` (None if no block or registry)."""
        registry = self._config.fence_handlers
        block = self.fence_block_at(pos)
        if block is None or registry is None:
            return None
        return registry.resolve(block.info)

    def link_at(self, pos: int) -> LinkTarget | None:
        with self._lock:
            self.drain()
            span = self._store.span_at(SpanKind.LINK, pos)
            if span is None:
                return None
            return LinkTarget.from_span(span, self._text)

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"Document(length={len(self._text)}, pending={len(self._dirty)})"
