"""Unordered list item classifier."""

from gemspan.lexer.lines import skip_blanks
from gemspan.spans import Group, Span, SpanKind


def classify_ulist_item(line: str, line_start: int) -> Span | None:
    """Try to classify a line as an unordered list item.

    List items are ``*`` followed by at least one blank. The ``content``
    group is omitted while the item is still empty (``"* "``).

    Args:
        line: Line content without its newline
        line_start: Position in source where the line starts

    Returns:
        ULIST_ITEM span, or None.
    """
    if not line.startswith("*"):
        return None

    content = skip_blanks(line, 1)
    if content == 1:
        return None

    end = line_start + len(line)
    groups = [Group("markup", line_start, line_start + 1)]
    if content < len(line):
        groups.append(Group("content", line_start + content, end))
    return Span(SpanKind.ULIST_ITEM, line_start, end, tuple(groups))
