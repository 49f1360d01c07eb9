"""Fenced blocks as values, info-string parsing and the handler registry.

Hosts that offer "edit this block in its own context" need three things
from the engine: the resolved block (its spans and content range), the
parsed info string of the opening fence, and a way to pick a handler for
the block's language. The engine provides all three; opening the editing
context and writing edits back stay with the host.

Info strings have the form ``language | display name``. Either side may be
missing. Only the first pipe splits; anything after it belongs to the
name. Unknown languages fall back silently to the registry default.

Thread Safety:
FenceInfo, FenceBlock and FenceHandlerRegistry are immutable and safe to
share. Use FenceHandlerRegistryBuilder for mutable construction.

Example:
    >>> builder = FenceHandlerRegistryBuilder()
    >>> builder.register(PythonHandler())
    >>> registry = builder.build()
    >>> registry.resolve(FenceInfo.parse("python | setup.py"))
    <PythonHandler ...>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from gemspan.errors import RegistryError
from gemspan.lexer.lines import next_line
from gemspan.lexer.modes import FenceState
from gemspan.spans import Span, SpanKind
from gemspan.store import SpanStore


@dataclass(frozen=True, slots=True)
class FenceInfo:
    """Parsed info string of an opening fence.

    Attributes:
        language: Language tag, lowercased (None when absent)
        name: Display name for the block (None when absent)

    """

    language: str | None = None
    name: str | None = None

    @classmethod
    def parse(cls, info: str | None) -> FenceInfo:
        """Parse ``language | name``.

        Examples:
            >>> FenceInfo.parse("python | setup.py")
            FenceInfo(language='python', name='setup.py')
            >>> FenceInfo.parse("| notes")
            FenceInfo(language=None, name='notes')
            >>> FenceInfo.parse("a | b | c")
            FenceInfo(language='a', name='b | c')
        """
        if not info:
            return cls()
        language, _, name = info.partition("|")
        language = language.strip()
        name = name.strip()
        return cls(language.lower() or None, name or None)


@dataclass(frozen=True, slots=True)
class FenceBlock:
    """One fenced block: opening fence, preformatted text, closing fence.

    Attributes:
        begin: FENCE_BEGIN span
        pre: PRE_TEXT span (None when the block has no content yet)
        end: FENCE_END span (None while the block is Open)
        info: Parsed info string of the opening fence

    """

    begin: Span
    pre: Span | None
    end: Span | None
    info: FenceInfo

    @property
    def state(self) -> FenceState:
        return FenceState.CLOSED if self.end is not None else FenceState.OPEN

    @property
    def content_range(self) -> tuple[int, int]:
        """``[start, end)`` of the preformatted content (empty if none)."""
        if self.pre is not None:
            return self.pre.start, self.pre.end
        stop = self.end.start if self.end is not None else self.begin.end
        return stop, stop

    @property
    def extent(self) -> tuple[int, int]:
        """``[start, end)`` covering the whole block as far as it is resolved."""
        if self.end is not None:
            return self.begin.start, self.end.end
        if self.pre is not None:
            return self.begin.start, self.pre.end
        return self.begin.start, self.begin.end

    def content(self, source: str) -> str:
        start, end = self.content_range
        return source[start:end]


def fence_block_for(store: SpanStore, source: str, begin: Span) -> FenceBlock:
    """Assemble the FenceBlock opened by ``begin`` from the store."""
    gap_start = next_line(source, begin.start)
    pre = store.span_at(SpanKind.PRE_TEXT, gap_start)
    if pre is not None and pre.start != gap_start:
        pre = None

    end = store.following(SpanKind.FENCE_END, begin.end)
    if end is not None:
        following_begin = store.following(SpanKind.FENCE_BEGIN, begin.end)
        if following_begin is not None and following_begin.start < end.start:
            end = None

    return FenceBlock(begin, pre, end, FenceInfo.parse(begin.text(source, "alt")))


def fence_blocks(store: SpanStore, source: str, start: int, end: int) -> list[FenceBlock]:
    """Every block whose opening fence overlaps ``[start, end)``."""
    return [
        fence_block_for(store, source, begin)
        for begin in store.query(start, end, SpanKind.FENCE_BEGIN)
    ]


def fence_block_at(store: SpanStore, source: str, pos: int) -> FenceBlock | None:
    """The block whose fences or content contain ``pos``, if any."""
    begin = store.previous(SpanKind.FENCE_BEGIN, pos)
    if begin is None:
        return None
    block = fence_block_for(store, source, begin)
    start, stop = block.extent
    if start <= pos < stop:
        return block
    return None


@runtime_checkable
class FenceHandler(Protocol):
    """Protocol for host handlers of fenced block content.

    Attributes:
        names: Language tags this handler responds to (e.g. ("python", "py"))

    """

    names: tuple[str, ...]

    def open(self, block: FenceBlock, content: str) -> None:
        """Open a dedicated editing context for ``content``."""
        ...


class FenceHandlerRegistry:
    """Immutable language tag -> handler mapping.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_by_name", "_default")

    def __init__(
        self,
        by_name: dict[str, FenceHandler],
        default: FenceHandler | None = None,
    ) -> None:
        """Initialize registry with a pre-built mapping.

        Use FenceHandlerRegistryBuilder to create instances.
        """
        self._by_name = by_name
        self._default = default

    def get(self, tag: str) -> FenceHandler | None:
        """Handler registered for ``tag`` (case-insensitive), or None."""
        return self._by_name.get(tag.lower())

    def resolve(self, info: FenceInfo) -> FenceHandler | None:
        """Handler for a block's language, falling back to the default."""
        if info.language is not None:
            handler = self._by_name.get(info.language)
            if handler is not None:
                return handler
        return self._default

    @property
    def default(self) -> FenceHandler | None:
        return self._default

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._by_name)

    def __contains__(self, tag: str) -> bool:
        return tag.lower() in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


class FenceHandlerRegistryBuilder:
    """Mutable builder for FenceHandlerRegistry.

    Example:
        >>> builder = FenceHandlerRegistryBuilder()
        >>> builder.register(PythonHandler()).set_default(PlainHandler())
        >>> registry = builder.build()
    """

    __slots__ = ("_by_name", "_default")

    def __init__(self) -> None:
        self._by_name: dict[str, FenceHandler] = {}
        self._default: FenceHandler | None = None

    def register(self, handler: FenceHandler) -> FenceHandlerRegistryBuilder:
        """Register a handler under each of its names.

        Returns:
            Self for chaining

        Raises:
            TypeError: If the handler has no ``names`` attribute
            RegistryError: If a name is already registered
        """
        if not hasattr(handler, "names"):
            msg = f"Handler {type(handler).__name__} missing 'names' attribute"
            raise TypeError(msg)

        for name in handler.names:
            tag = name.lower()
            existing = self._by_name.get(tag)
            if existing is not None and existing is not handler:
                raise RegistryError(
                    tag, f"already registered by {type(existing).__name__}"
                )
            self._by_name[tag] = handler
        return self

    def set_default(self, handler: FenceHandler | None) -> FenceHandlerRegistryBuilder:
        """Handler used for untagged blocks and unknown languages."""
        self._default = handler
        return self

    def build(self) -> FenceHandlerRegistry:
        return FenceHandlerRegistry(dict(self._by_name), self._default)
