"""Line classification and fence scanning for Gemtext.

Architecture:
lexer/
├── __init__.py          # Re-exports
├── lines.py             # Line windows over the source string
├── modes.py             # FenceState enum, markup constants
├── classifiers/         # Pure single-line classifiers
│   ├── heading.py       # # / ## / ###
│   ├── list.py          # * item
│   ├── quote.py         # > quote
│   ├── link.py          # => url label
│   └── fence.py         # ``` opening / closing lines
├── matchers.py          # LineMatcher: classifier applied over a region
└── scanner.py           # FenceScanner: multi-line fenced blocks

The scanner must finish a region before the matchers run over it, so the
matchers' suppression predicate sees final preformatted coverage.
"""

from gemspan.lexer.matchers import LINE_MATCHERS, LineMatcher
from gemspan.lexer.modes import FenceState
from gemspan.lexer.scanner import (
    FenceScanner,
    continues_open_fence,
    fence_state_at,
    open_fence_before,
)

__all__ = [
    "LINE_MATCHERS",
    "FenceScanner",
    "FenceState",
    "LineMatcher",
    "continues_open_fence",
    "fence_state_at",
    "open_fence_before",
]
