"""Tests for span store serialization."""

import json

import pytest

from gemspan import classify
from gemspan.errors import SpanRangeError
from gemspan.serialization import (
    from_dict,
    from_json,
    span_from_dict,
    span_to_dict,
    to_dict,
    to_json,
)
from gemspan.spans import Group, Span, SpanKind

SOURCE = "# A\n=> /x y\n```sh\nz\n```\n"


class TestToDict:
    def test_shape(self) -> None:
        data = to_dict(classify("# A\n"))
        assert data == {
            "length": 4,
            "spans": [
                {
                    "kind": "heading",
                    "start": 0,
                    "end": 3,
                    "groups": [
                        {"name": "markup", "start": 0, "end": 1},
                        {"name": "title", "start": 2, "end": 3},
                    ],
                }
            ],
        }

    def test_spans_ordered_by_start(self) -> None:
        starts = [s["start"] for s in to_dict(classify(SOURCE))["spans"]]
        assert starts == sorted(starts)

    def test_span_dict_round_trip(self) -> None:
        span = Span(SpanKind.LINK, 0, 5, (Group("markup", 0, 2), Group("url", 3, 5)))
        assert span_from_dict(span_to_dict(span)) == span


class TestJson:
    def test_json_is_deterministic(self) -> None:
        assert to_json(classify(SOURCE)) == to_json(classify(SOURCE))

    def test_json_keys_sorted(self) -> None:
        text = to_json(classify("# A\n"), indent=2)
        assert list(json.loads(text)) == ["length", "spans"]
        assert text.index('"length"') < text.index('"spans"')

    def test_restore(self) -> None:
        store = classify(SOURCE)
        assert from_json(to_json(store)).snapshot() == store.snapshot()

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValueError):
            from_dict({"length": 3, "spans": [{"kind": "table", "start": 0, "end": 1}]})

    def test_span_past_length_rejected(self) -> None:
        with pytest.raises(SpanRangeError):
            from_dict({"length": 2, "spans": [{"kind": "heading", "start": 0, "end": 3}]})
