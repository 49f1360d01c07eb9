"""Fence line classifier."""

from gemspan.lexer.lines import BLANKS, skip_blanks
from gemspan.lexer.modes import FENCE_MARKER
from gemspan.spans import Group, Span, SpanKind


def classify_fence_begin(line: str, line_start: int) -> Span | None:
    """Try to classify a line as an opening fence.

    Opening fences are optional blanks, three backticks, then optional
    alt text (the info string). Backticks later in a line never count.
    Leading blanks are allowed, so an indented "  ```" opens a block the
    same way it closes one (see ``is_closing_fence``); Gemtext clients
    that require column 0 would show such a line as text.

    Args:
        line: Line content without its newline
        line_start: Position in source where the line starts

    Returns:
        FENCE_BEGIN span with ``markup`` and (when present) ``alt`` groups,
        or None.
    """
    marker = skip_blanks(line, 0)
    if not line.startswith(FENCE_MARKER, marker):
        return None

    markup_end = marker + len(FENCE_MARKER)
    end = line_start + len(line)
    groups = [Group("markup", line_start + marker, line_start + markup_end)]

    alt_start = skip_blanks(line, markup_end)
    alt_end = len(line.rstrip(BLANKS))
    if alt_start < alt_end:
        groups.append(Group("alt", line_start + alt_start, line_start + alt_end))
    return Span(SpanKind.FENCE_BEGIN, line_start, end, tuple(groups))


def is_closing_fence(line: str) -> bool:
    """Check if a line closes an open fence: the marker and blanks only."""
    return line.strip(BLANKS) == FENCE_MARKER


def classify_fence_end(line: str, line_start: int) -> Span | None:
    """Classify a closing fence line, or None if the line is not one."""
    if not is_closing_fence(line):
        return None
    marker = line_start + skip_blanks(line, 0)
    return Span(
        SpanKind.FENCE_END,
        line_start,
        line_start + len(line),
        (Group("markup", marker, marker + len(FENCE_MARKER)),),
    )
