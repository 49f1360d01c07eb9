"""Region extension for incremental reclassification.

An edit only changes the classification of text near it, but "near" must
be measured in blocks, not characters: a paragraph is the unit line
matchers can be re-run on, and a fenced block must be rescanned as a
whole. ``extend_region`` grows an edited range to paragraph boundaries
and then out to the edges of any preformatted text it cuts into.

Each call grows the range or returns None at a fixed point. The range
never shrinks and the buffer is finite, so iterating always terminates;
``extend_to_fixed_point`` does the iteration.

Example:
    >>> source = "a\\n\\nb\\nc\\n\\nd"
    >>> extend_to_fixed_point(source, SpanStore(len(source)), 5, 6)
    (3, 8)
"""

from __future__ import annotations

from gemspan.errors import RegionError, SpanRangeError
from gemspan.spans import SpanKind
from gemspan.store import SpanStore
from gemspan.utils.logger import get_logger

logger = get_logger(__name__)

# Two consecutive line breaks separate paragraphs
PARAGRAPH_BREAK = "\n\n"


def extend_region(
    source: str,
    store: SpanStore,
    start: int,
    end: int,
) -> tuple[int, int] | None:
    """Grow ``[start, end)`` one step toward consistent block boundaries.

    Args:
        source: Full document text
        store: Span store describing ``source``
        start: Requested region start
        end: Requested region end

    Returns:
        The extended ``(start, end)``, or None if the range is already a
        fixed point.

    Raises:
        SpanRangeError: If the range lies outside the buffer.
    """
    if start < 0 or end > len(source) or start > end:
        raise SpanRangeError("Range outside buffer", start, end, len(source))

    # Back to just after the nearest paragraph break, or buffer start
    found = source.rfind(PARAGRAPH_BREAK, 0, start)
    new_start = 0 if found < 0 else found + len(PARAGRAPH_BREAK)

    # Forward to just after the nearest paragraph break, or buffer end
    found = source.find(PARAGRAPH_BREAK, max(end - len(PARAGRAPH_BREAK), 0))
    new_end = len(source) if found < 0 else found + len(PARAGRAPH_BREAK)

    # Keep whole fenced blocks together
    pre = store.span_at(SpanKind.PRE_TEXT, new_start)
    if pre is not None and pre.start < new_start:
        new_start = pre.start

    pre = store.span_at(SpanKind.PRE_TEXT, new_end)
    if pre is not None and pre.start < new_end:
        new_end = pre.end

    if (new_start, new_end) == (start, end):
        return None
    return new_start, new_end


def extend_to_fixed_point(
    source: str,
    store: SpanStore,
    start: int,
    end: int,
    *,
    max_steps: int | None = None,
) -> tuple[int, int]:
    """Iterate ``extend_region`` until it reports a fixed point.

    Args:
        source: Full document text
        store: Span store describing ``source``
        start: Requested region start
        end: Requested region end
        max_steps: Step cap (default: one more than the buffer length,
            since every step grows the range by at least one offset)

    Returns:
        The stable ``(start, end)``.

    Raises:
        RegionError: If the cap is reached without converging.
    """
    if max_steps is None:
        max_steps = len(source) + 1

    steps = 0
    while True:
        extended = extend_region(source, store, start, end)
        if extended is None:
            break
        steps += 1
        if steps > max_steps:
            msg = f"Region [{start}, {end}) did not converge after {max_steps} steps"
            raise RegionError(msg)
        start, end = extended

    logger.debug("Extended region to [%d, %d) in %d steps", start, end, steps)
    return start, end
