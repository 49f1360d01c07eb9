"""Tests for LinkTarget."""

import pytest

from gemspan import classify
from gemspan.links import LinkTarget
from gemspan.spans import Span, SpanKind


def _target(source: str) -> LinkTarget:
    store = classify(source)
    (span,) = store.query(0, store.length, SpanKind.LINK)
    return LinkTarget.from_span(span, source)


class TestLinkTarget:
    def test_absolute_url(self) -> None:
        target = _target("=> gemini://example.org Example page")
        assert target.url == "gemini://example.org"
        assert target.label == "Example page"
        assert target.scheme == "gemini"
        assert target.is_absolute
        assert (target.start, target.end) == (3, 23)

    def test_relative_url(self) -> None:
        target = _target("=> docs/intro.gmi")
        assert target.label is None
        assert target.scheme is None
        assert not target.is_absolute

    def test_scheme_is_lowercased(self) -> None:
        assert _target("=> HTTPS://Example.org").scheme == "https"

    def test_malformed_url_is_relative(self) -> None:
        assert _target("=> http://[::1").scheme is None

    def test_drive_letter_path_is_relative(self) -> None:
        target = _target("=> C:\\notes.gmi")
        assert target.url == "C:\\notes.gmi"
        assert target.scheme is None
        assert not target.is_absolute

    def test_non_link_span_rejected(self) -> None:
        with pytest.raises(ValueError):
            LinkTarget.from_span(Span(SpanKind.HEADING, 0, 3), "# A")
