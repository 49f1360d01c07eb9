"""Link line classifier."""

from gemspan.lexer.lines import BLANKS
from gemspan.lexer.modes import LINK_MARKER
from gemspan.spans import Group, Span, SpanKind


def classify_link(line: str, line_start: int) -> Span | None:
    """Try to classify a line as a link.

    Link lines are ``=>``, at most one blank, a url token (a run of
    non-blank characters), then an optional label. The label group keeps
    its leading blanks so ``=> url Example`` yields ``" Example"``.

    Args:
        line: Line content without its newline
        line_start: Position in source where the line starts

    Returns:
        LINK span with ``markup``, ``url`` and (when present) ``label``
        groups, or None when no url token follows the marker.
    """
    if not line.startswith(LINK_MARKER):
        return None

    pos = len(LINK_MARKER)
    if pos < len(line) and line[pos] in BLANKS:
        pos += 1

    url_start = pos
    while pos < len(line) and line[pos] not in BLANKS:
        pos += 1
    if pos == url_start:
        return None

    end = line_start + len(line)
    groups = [
        Group("markup", line_start, line_start + len(LINK_MARKER)),
        Group("url", line_start + url_start, line_start + pos),
    ]
    # Trailing blanks alone are not a label
    if line[pos:].strip(BLANKS):
        groups.append(Group("label", line_start + pos, end))
    return Span(SpanKind.LINK, line_start, end, tuple(groups))
