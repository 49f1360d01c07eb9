"""Highlight rendering: spans -> style runs for a viewport.

Every markup group gets Style.MARKUP; other groups get a kind-specific
style. Styles are additive: a link's text carries both its own style and
the LINK_BUTTON affordance. Preformatted content is exclusive: a PRE_TEXT
range carries PRE_CONTENT and nothing else.

The result of ``render`` is lazy and restartable: iterating it computes
runs from the spans captured for the viewport, and iterating it again
computes them afresh. Nothing is cached between renders.

Example:
    >>> store = classify("# Hi\\n")
    >>> [(r.start, r.end, r.style) for r in HighlightRenderer().render(store, 0, 5)]
    [(0, 1, <Style.MARKUP: 'markup'>), (2, 4, <Style.HEADING_1: 'heading-1'>)]
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from heapq import merge
from operator import attrgetter

from gemspan.config import DEFAULT_CONFIG, EngineConfig
from gemspan.spans import ALL_KINDS, Span, SpanKind
from gemspan.store import SpanStore
from gemspan.styles import HEADING_STYLES, Style, Theme

_GROUP_STYLES: dict[tuple[SpanKind, str], Style] = {
    (SpanKind.ULIST_ITEM, "content"): Style.LIST_ITEM,
    (SpanKind.BLOCKQUOTE, "content"): Style.BLOCKQUOTE,
    (SpanKind.LINK, "url"): Style.LINK_URL,
    (SpanKind.LINK, "label"): Style.LINK_LABEL,
    (SpanKind.FENCE_BEGIN, "alt"): Style.FENCE_ALT,
}


@dataclass(frozen=True, slots=True)
class StyleRun:
    """One style applied to ``[start, end)``.

    Attributes:
        start: Start offset
        end: End offset
        style: Logical style
        face: Host face name the theme maps the style to

    """

    start: int
    end: int
    style: Style
    face: str


class Highlights:
    """Lazy, restartable sequence of StyleRuns for one viewport."""

    __slots__ = ("_spans", "_start", "_end", "_theme", "_affordance")

    def __init__(
        self,
        spans: tuple[Span, ...],
        start: int,
        end: int,
        theme: Theme,
        affordance: bool,
    ) -> None:
        self._spans = spans
        self._start = start
        self._end = end
        self._theme = theme
        self._affordance = affordance

    def __iter__(self) -> Iterator[StyleRun]:
        pre_ranges = [(s.start, s.end) for s in self._spans if s.kind is SpanKind.PRE_TEXT]
        for span in self._spans:
            for start, end, style in _span_styles(span, self._affordance):
                start = max(start, self._start)
                end = min(end, self._end)
                if start >= end:
                    continue
                if style is not Style.PRE_CONTENT and _inside_any(start, end, pre_ranges):
                    continue
                yield StyleRun(start, end, style, self._theme.face(style))

    def __repr__(self) -> str:
        return f"Highlights([{self._start}, {self._end}), {len(self._spans)} spans)"


class HighlightRenderer:
    """Maps spans to style runs.

    Args:
        config: Engine configuration (theme, link affordance)

    """

    __slots__ = ("_config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    def render(self, store: SpanStore, start: int, end: int) -> Highlights:
        """Style runs for the viewport ``[start, end)``, ordered by start.

        The spans overlapping the viewport are captured now; runs are
        computed when the result is iterated.
        """
        per_kind = [store.query(start, end, kind) for kind in ALL_KINDS]
        spans = tuple(merge(*per_kind, key=attrgetter("start")))
        return Highlights(
            spans, start, end, self._config.theme, self._config.link_affordance
        )


def _span_styles(span: Span, affordance: bool) -> list[tuple[int, int, Style]]:
    """Raw ``(start, end, style)`` triples for one span, ordered by start."""
    if span.kind is SpanKind.PRE_TEXT:
        return [(span.start, span.end, Style.PRE_CONTENT)]

    runs: list[tuple[int, int, Style]] = []
    if span.kind is SpanKind.LINK and affordance:
        runs.append((span.start, span.end, Style.LINK_BUTTON))

    for group in span.groups:
        if group.name == "markup":
            style = Style.MARKUP
        elif span.kind is SpanKind.HEADING and group.name == "title":
            markup = span.group("markup")
            level = markup.end - markup.start if markup is not None else 1
            style = HEADING_STYLES[min(level, len(HEADING_STYLES)) - 1]
        else:
            style = _GROUP_STYLES.get((span.kind, group.name))
            if style is None:
                continue
        runs.append((group.start, group.end, style))

    runs.sort(key=lambda run: run[0])
    return runs


def _inside_any(start: int, end: int, ranges: list[tuple[int, int]]) -> bool:
    return any(start < stop and begin < end for begin, stop in ranges)
