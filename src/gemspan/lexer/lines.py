"""Line navigation over a source string.

Every scanner works on whole lines: find the line window, classify it,
then move to the next line start. Line windows exclude the terminating
newline.
"""

from __future__ import annotations

from collections.abc import Iterator

BLANKS = " \t"


def line_start(source: str, pos: int) -> int:
    """Offset of the first character of the line containing ``pos``."""
    return source.rfind("\n", 0, pos) + 1


def line_end(source: str, pos: int) -> int:
    """Offset of the newline ending the line containing ``pos`` (or EOF)."""
    end = source.find("\n", pos)
    return len(source) if end < 0 else end


def next_line(source: str, pos: int) -> int:
    """Start of the line after the one containing ``pos`` (EOF if none)."""
    end = line_end(source, pos)
    return end + 1 if end < len(source) else end


def iter_lines(source: str, start: int, end: int) -> Iterator[tuple[int, int]]:
    """Yield ``(line_start, line_end)`` for each line starting in ``[start, end)``.

    ``start`` must be a line start.
    """
    pos = start
    size = len(source)
    while pos < end:
        stop = source.find("\n", pos)
        if stop < 0:
            stop = size
        yield pos, stop
        if stop >= size:
            return
        pos = stop + 1


def snap_region(source: str, start: int, end: int) -> tuple[int, int]:
    """Widen ``[start, end)`` to whole lines.

    The start moves back to its line start. An end in the middle of a line
    moves past that line's newline; an end already at a line start stays.
    """
    new_start = line_start(source, start)
    end = max(end, start)
    if end == 0 or end >= len(source) or source[end - 1] == "\n":
        new_end = min(end, len(source))
    else:
        new_end = next_line(source, end)
    return new_start, new_end


def skip_blanks(line: str, pos: int) -> int:
    """Index of the first non-blank character of ``line`` at or after ``pos``."""
    size = len(line)
    while pos < size and line[pos] in BLANKS:
        pos += 1
    return pos
