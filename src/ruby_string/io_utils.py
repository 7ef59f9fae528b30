"""JSON Lines I/O for segments and ruby strings.

One JSON object per segment, in text order::

    {"text": "ここは"}
    {"text": "東", "ruby": "とう"}

A record without a ``ruby`` key is plain text. The interlinear encoding is
export-only; this record format is the one that can be read back.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import orjson

from ruby_string.string import RubyString
from ruby_string.types import PlainSegment, RubiedSegment, Segment


def segment_to_record(segment: Segment) -> dict[str, str]:
    match segment:
        case PlainSegment(text=text):
            return {"text": text}
        case RubiedSegment(text=text, ruby=ruby):
            return {"text": text, "ruby": ruby}


def segment_from_record(record: Any) -> Segment:
    """Build a segment from a decoded record.

    Raises:
        ValueError: If the record is not an object, has no ``text``, or a
            field is not a string.
    """
    if not isinstance(record, dict):
        raise ValueError(f"segment record must be an object, got {type(record).__name__}")
    if "text" not in record:
        raise ValueError("segment record is missing 'text'")
    text = record["text"]
    ruby = record.get("ruby")
    if not isinstance(text, str):
        raise ValueError(f"segment 'text' must be a string, got {type(text).__name__}")
    if ruby is None:
        return PlainSegment(text)
    if not isinstance(ruby, str):
        raise ValueError(f"segment 'ruby' must be a string, got {type(ruby).__name__}")
    return RubiedSegment(text, ruby)


def ruby_string_segments(rs: RubyString) -> Iterator[Segment]:
    """Yield every run of ``rs``, including zero-width rubied runs at the end.

    ``segments()`` stops as soon as the text is used up, so a rubied run with
    empty text pushed last is never reached by it. Those placements all sit
    at ``len(packed_text)`` and are emitted here after the iterator stops.
    """
    it = rs.segments()
    yield from it
    ruby = rs.packed_ruby
    for idx in range(it.next_placement_idx, rs.placement_count):
        placement = rs.placement(idx)
        yield RubiedSegment("", ruby[placement.ruby_start:placement.ruby_end])


def ruby_string_to_records(rs: RubyString) -> list[dict[str, str]]:
    return [segment_to_record(s) for s in ruby_string_segments(rs)]


def ruby_string_from_records(records: Iterable[Any]) -> RubyString:
    return RubyString.from_segments(segment_from_record(r) for r in records)


def iter_jsonl(path: Path) -> Iterator[tuple[int, Any]]:
    """Yield ``(lineno, record)`` for each JSON line. Blank lines skipped.

    Line numbers are 1-based and count blank lines. Invalid JSON raises
    ValueError naming the file and line.
    """
    raw = path.read_bytes()
    for lineno, line in enumerate(raw.split(b"\n"), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = orjson.loads(line)
        except orjson.JSONDecodeError as exc:
            raise ValueError(f"{path}:{lineno}: {exc}") from exc
        yield lineno, record


def save_jsonl(records: list[dict[str, Any]], path: Path) -> None:
    """Save a list of dicts as a JSON Lines file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [orjson.dumps(r) for r in records]
    path.write_bytes(b"\n".join(lines) + b"\n" if lines else b"")


def load_ruby_string(path: Path) -> RubyString:
    """Load a RubyString from a segment JSONL file.

    Errors name the offending line number (1-based, blank lines counted).
    """
    rs = RubyString()
    for lineno, record in iter_jsonl(path):
        try:
            segment = segment_from_record(record)
        except ValueError as exc:
            raise ValueError(f"{path}:{lineno}: {exc}") from exc
        rs.push_segment(segment)
    return rs


def save_ruby_string(rs: RubyString, path: Path) -> None:
    save_jsonl(ruby_string_to_records(rs), path)
