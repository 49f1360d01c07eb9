"""Exception classes for gemspan.

Classification itself never raises: any text yields a valid span store.
These exceptions cover misuse at the API boundary (offsets outside the
buffer, duplicate handler registration) and internal convergence failures.
"""

from __future__ import annotations


class GemspanError(Exception):
    """Base exception for all gemspan errors.

    Subclass this for specific error categories.
    """

    pass


class SpanRangeError(GemspanError):
    """Offsets that do not describe a valid range of the current buffer.

    Raised when a range is inverted or reaches outside ``[0, length]``.
    """

    def __init__(
        self,
        message: str,
        start: int | None = None,
        end: int | None = None,
        length: int | None = None,
    ) -> None:
        """Initialize range error with the offending offsets.

        Args:
            message: Error description
            start: Range start offset (optional)
            end: Range end offset (optional)
            length: Buffer length the range was checked against (optional)
        """
        self.message = message
        self.start = start
        self.end = end
        self.length = length

        location = ""
        if start is not None and end is not None:
            location = f"[{start}, {end})"
            if length is not None:
                location += f" of {length}"
            location += " "

        super().__init__(f"{location}{message}")


class RegionError(GemspanError):
    """Region extension failed to reach a fixed point.

    Extension grows monotonically over a finite buffer, so this signals a
    bug rather than bad input.
    """

    pass


class RegistryError(GemspanError):
    """Error registering a fenced-block handler.

    Raised when a language tag is already claimed by another handler.
    """

    def __init__(self, tag: str, message: str) -> None:
        """Initialize registry error.

        Args:
            tag: Language tag that failed to register
            message: Description of the conflict
        """
        self.tag = tag
        super().__init__(f"Fence handler '{tag}': {message}")
