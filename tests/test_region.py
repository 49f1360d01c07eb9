"""Tests for region extension."""

import pytest

from gemspan import classify
from gemspan.errors import RegionError, SpanRangeError
from gemspan.region import extend_region, extend_to_fixed_point
from gemspan.store import SpanStore


class TestExtendRegion:
    """One extension step."""

    def test_grows_to_paragraph_breaks(self) -> None:
        source = "a\n\nb\nc\n\nd"
        assert extend_region(source, SpanStore(len(source)), 5, 6) == (3, 8)

    def test_fixed_point_returns_none(self) -> None:
        source = "a\n\nb\nc\n\nd"
        assert extend_region(source, SpanStore(len(source)), 3, 8) is None

    def test_no_breaks_covers_buffer(self) -> None:
        source = "one\ntwo\nthree"
        assert extend_region(source, SpanStore(len(source)), 5, 5) == (0, len(source))

    def test_break_straddling_end_counts(self) -> None:
        # The end sits between the two newlines of a paragraph break
        source = "a\n\nb"
        assert extend_region(source, SpanStore(len(source)), 0, 2) == (0, 3)

    def test_pulls_start_back_into_pre_text(self) -> None:
        source = "```\na\n\nb\n```\n"
        store = classify(source)
        # Paragraph break inside the block lands at 7, inside PreText [4, 9)
        extended = extend_region(source, store, 7, 8)
        assert extended is not None
        assert extended[0] == 4

    def test_pushes_end_out_of_pre_text(self) -> None:
        source = "x\n\n```\na\n\nb\n```\n"
        store = classify(source)
        extended = extend_region(source, store, 3, 4)
        assert extended is not None
        assert extended[1] == 12

    def test_outside_buffer_rejected(self) -> None:
        with pytest.raises(SpanRangeError):
            extend_region("abc", SpanStore(3), 0, 4)


class TestExtendToFixedPoint:
    def test_converges(self) -> None:
        source = "x\n\n```\na\n\nb\n```\n\ny"
        store = classify(source)
        start, end = extend_to_fixed_point(source, store, 9, 10)
        assert start <= 9 and end >= 10
        assert extend_region(source, store, start, end) is None
        assert (start, end) == (3, 17)

    def test_result_contains_request(self) -> None:
        source = "p\n\nq\n\nr"
        start, end = extend_to_fixed_point(source, SpanStore(len(source)), 3, 4)
        assert (start, end) == (3, 6)

    def test_step_cap_raises(self) -> None:
        source = "a\nb\nc"
        with pytest.raises(RegionError):
            extend_to_fixed_point(source, SpanStore(len(source)), 2, 2, max_steps=0)
