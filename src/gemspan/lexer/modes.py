"""Fence states and fence constants.

A fenced block moves through three states as the scanner resolves it:
- UNOPENED: no opening fence seen yet
- OPEN: opening fence seen, closing fence not (yet) found
- CLOSED: opening and closing fence both seen
"""

from __future__ import annotations

from enum import Enum, auto


class FenceState(Enum):
    """Resolution state of one fenced block."""

    UNOPENED = auto()
    OPEN = auto()
    CLOSED = auto()


# Gemtext toggles preformatted mode on lines starting with three backticks
FENCE_MARKER = "```"

# Prefix of a link line
LINK_MARKER = "=>"

# Deepest heading level Gemtext defines
MAX_HEADING_LEVEL = 3
