"""Link targets exposed to the host.

The engine parses link lines; following them is the host's job. A
LinkTarget carries the url and label of one LINK span plus whether the url
is absolute (has a scheme, open externally) or relative (resolve against
the current document). A one-letter scheme is a drive letter, so
Windows paths such as "C:\\notes.gmi" count as relative.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from gemspan.spans import Span, SpanKind


@dataclass(frozen=True, slots=True)
class LinkTarget:
    """Parsed destination of a link line.

    Attributes:
        url: The url token as written
        label: Label text with surrounding blanks removed (None if absent)
        scheme: Lowercased url scheme (None for relative urls)
        start: Offset of the url token in the document
        end: End offset of the url token

    """

    url: str
    label: str | None
    scheme: str | None
    start: int
    end: int

    @property
    def is_absolute(self) -> bool:
        return self.scheme is not None

    @classmethod
    def from_span(cls, span: Span, source: str) -> LinkTarget:
        """Build a LinkTarget from a LINK span.

        Raises:
            ValueError: If ``span`` is not a LINK span.
        """
        url_group = span.group("url")
        if span.kind is not SpanKind.LINK or url_group is None:
            msg = f"Expected a LINK span, got {span!r}"
            raise ValueError(msg)

        url = url_group.text(source)
        label = span.text(source, "label")
        if label is not None:
            label = label.strip() or None

        # urlsplit rejects some malformed urls (bad IPv6 brackets); treat as relative
        try:
            scheme = urlsplit(url).scheme.lower() or None
        except ValueError:
            scheme = None
        # One letter is a drive (C:\notes.gmi), not a scheme
        if scheme is not None and len(scheme) < 2:
            scheme = None

        return cls(url, label, scheme, url_group.start, url_group.end)
