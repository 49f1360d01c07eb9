"""Single-line classifiers.

Each classifier is pure logic: it takes one line (without its newline) and
the offset where the line starts, and returns a Span or None. No classifier
looks at neighbouring lines.
"""

from gemspan.lexer.classifiers.fence import (
    classify_fence_begin,
    classify_fence_end,
    is_closing_fence,
)
from gemspan.lexer.classifiers.heading import classify_heading
from gemspan.lexer.classifiers.link import classify_link
from gemspan.lexer.classifiers.list import classify_ulist_item
from gemspan.lexer.classifiers.quote import classify_blockquote

__all__ = [
    "classify_blockquote",
    "classify_fence_begin",
    "classify_fence_end",
    "classify_heading",
    "classify_link",
    "classify_ulist_item",
    "is_closing_fence",
]
