"""Heading classifier."""

from gemspan.lexer.lines import skip_blanks
from gemspan.lexer.modes import MAX_HEADING_LEVEL
from gemspan.spans import Group, Span, SpanKind


def classify_heading(line: str, line_start: int) -> Span | None:
    """Try to classify a line as a heading.

    Headings start with 1-3 ``#`` characters, then at least one blank, then
    non-empty title text. ``####`` and deeper are not headings.

    Args:
        line: Line content without its newline
        line_start: Position in source where the line starts

    Returns:
        HEADING span with ``markup`` and ``title`` groups, or None.
    """
    level = 0
    while level < len(line) and line[level] == "#":
        level += 1

    if level == 0 or level > MAX_HEADING_LEVEL:
        return None

    title = skip_blanks(line, level)
    # Blank required after the markup, and a title after the blank
    if title == level or title == len(line):
        return None

    end = line_start + len(line)
    return Span(
        SpanKind.HEADING,
        line_start,
        end,
        (
            Group("markup", line_start, line_start + level),
            Group("title", line_start + title, end),
        ),
    )
