"""
gemspan: Incremental Gemtext span classification

Classifies Gemtext (headings, list items, blockquotes, links, fenced
preformatted blocks) into typed, offset-anchored spans for syntax
highlighting and folding, and keeps them correct under incremental edits
by rescanning only a bounded region around each edit.

Quick Start:
    >>> from gemspan import Document
    >>> doc = Document("# Title\\n=> gemini://example.org Example\\n")
    >>> [e.title for e in doc.headings()]
    ['Title']
    >>> doc.link_at(10).url
    'gemini://example.org'

    >>> # Edits queue a region; queries classify it before reading
    >>> doc.insert(0, "```\\n")
    >>> doc.headings()
    []

One-shot classification:
    >>> from gemspan import classify, SpanKind
    >>> store = classify("```\\n# not a heading\\n```\\n")
    >>> store.query(0, store.length, SpanKind.HEADING)
    []

Installation:
    pip install gemspan              # zero runtime dependencies
    pip install gemspan[test]        # + pytest and hypothesis
"""

from gemspan.config import EngineConfig
from gemspan.document import Document
from gemspan.errors import GemspanError, RegionError, RegistryError, SpanRangeError
from gemspan.fences import (
    FenceBlock,
    FenceHandler,
    FenceHandlerRegistry,
    FenceHandlerRegistryBuilder,
    FenceInfo,
)
from gemspan.lexer import FenceScanner, FenceState, LineMatcher
from gemspan.links import LinkTarget
from gemspan.outline import FENCED_DEPTH, FoldNode, OutlineEntry, OutlineIndex
from gemspan.propertize import Propertizer
from gemspan.region import extend_region, extend_to_fixed_point
from gemspan.render import HighlightRenderer, Highlights, StyleRun
from gemspan.serialization import from_dict, from_json, to_dict, to_json
from gemspan.spans import Group, Span, SpanKind
from gemspan.store import SpanStore
from gemspan.styles import Style, Theme

__version__ = "0.1.0"


def classify(source: str, *, config: EngineConfig | None = None) -> SpanStore:
    """Classify a whole text in one pass.

    Args:
        source: Gemtext source
        config: Engine configuration (only ``fence_search_limit`` applies)

    Returns:
        A SpanStore describing ``source``.

    Example:
        >>> store = classify("## Section\\n")
        >>> store.query(0, store.length, SpanKind.HEADING)
        [Span(HEADING, 0:10, [markup, title])]
    """
    store = SpanStore(len(source))
    limit = config.fence_search_limit if config is not None else None
    Propertizer(store, fence_search_limit=limit).propertize(source, 0, len(source))
    return store


__all__ = [
    "FENCED_DEPTH",
    "Document",
    "EngineConfig",
    "FenceBlock",
    "FenceHandler",
    "FenceHandlerRegistry",
    "FenceHandlerRegistryBuilder",
    "FenceInfo",
    "FenceScanner",
    "FenceState",
    "FoldNode",
    "GemspanError",
    "Group",
    "HighlightRenderer",
    "Highlights",
    "LineMatcher",
    "LinkTarget",
    "OutlineEntry",
    "OutlineIndex",
    "Propertizer",
    "RegionError",
    "RegistryError",
    "Span",
    "SpanKind",
    "SpanRangeError",
    "SpanStore",
    "Style",
    "StyleRun",
    "Theme",
    "__version__",
    "classify",
    "extend_region",
    "extend_to_fixed_point",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
