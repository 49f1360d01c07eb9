"""Span store serialization: deterministic dict / JSON snapshots.

Useful for:
- Comparing classification results (idempotence checks, regression fixtures)
- Handing spans to a host process over a pipe
- Debugging and inspection

All output is deterministic (spans ordered by start then kind, sorted keys).

Example:
    from gemspan import classify
    from gemspan.serialization import to_json, from_json

    store = classify("# Hello\\n")
    restored = from_json(to_json(store))
    assert restored.snapshot() == store.snapshot()

Thread Safety:
    All functions are pure; callers must not mutate the store concurrently.

"""

import json
from typing import Any

from gemspan.spans import Group, Span, SpanKind
from gemspan.store import SpanStore


def span_to_dict(span: Span) -> dict[str, Any]:
    return {
        "kind": span.kind.value,
        "start": span.start,
        "end": span.end,
        "groups": [{"name": g.name, "start": g.start, "end": g.end} for g in span.groups],
    }


def span_from_dict(data: dict[str, Any]) -> Span:
    groups = tuple(Group(g["name"], g["start"], g["end"]) for g in data.get("groups", ()))
    return Span(SpanKind(data["kind"]), data["start"], data["end"], groups)


def to_dict(store: SpanStore) -> dict[str, Any]:
    """Convert a span store to a JSON-compatible dict."""
    return {
        "length": store.length,
        "spans": [span_to_dict(span) for span in store.snapshot()],
    }


def from_dict(data: dict[str, Any]) -> SpanStore:
    """Rebuild a span store from ``to_dict`` output.

    Raises:
        SpanRangeError: If a span does not fit the recorded length.
        ValueError: If a span kind is unknown.
    """
    store = SpanStore(data["length"])
    for item in data["spans"]:
        span = span_from_dict(item)
        store.set(span.start, span.end, span.kind, span.groups)
    return store


def to_json(store: SpanStore, *, indent: int | None = None) -> str:
    """Serialize a span store to a JSON string."""
    return json.dumps(to_dict(store), sort_keys=True, indent=indent)


def from_json(text: str) -> SpanStore:
    """Deserialize a span store from a JSON string."""
    return from_dict(json.loads(text))
