"""Blockquote classifier."""

from gemspan.lexer.lines import skip_blanks
from gemspan.spans import Group, Span, SpanKind


def classify_blockquote(line: str, line_start: int) -> Span | None:
    """Try to classify a line as a blockquote.

    Blockquotes start with ``>``; blanks after the marker are optional and
    the quoted text may be empty.

    Args:
        line: Line content without its newline
        line_start: Position in source where the line starts

    Returns:
        BLOCKQUOTE span, or None.
    """
    if not line.startswith(">"):
        return None

    content = skip_blanks(line, 1)
    end = line_start + len(line)
    groups = [Group("markup", line_start, line_start + 1)]
    if content < len(line):
        groups.append(Group("content", line_start + content, end))
    return Span(SpanKind.BLOCKQUOTE, line_start, end, tuple(groups))
