"""Tests for ruby_string.io_utils module."""
from pathlib import Path

import orjson
import pytest

from ruby_string import PlainSegment, RubiedSegment, RubyString
from ruby_string.io_utils import (
    iter_jsonl,
    load_ruby_string,
    ruby_string_from_records,
    ruby_string_segments,
    ruby_string_to_records,
    save_jsonl,
    save_ruby_string,
    segment_from_record,
    segment_to_record,
)


def _tokyo() -> RubyString:
    return RubyString.from_segments([
        PlainSegment("ここは"),
        RubiedSegment("東", "とう"),
        RubiedSegment("京", "きょう"),
        PlainSegment("です"),
    ])


class TestRecords:
    def test_plain_record(self) -> None:
        assert segment_to_record(PlainSegment("です")) == {"text": "です"}

    def test_rubied_record(self) -> None:
        assert segment_to_record(RubiedSegment("東", "とう")) == {"text": "東", "ruby": "とう"}

    def test_from_record_plain(self) -> None:
        assert segment_from_record({"text": "a"}) == PlainSegment("a")

    def test_from_record_null_ruby_is_plain(self) -> None:
        assert segment_from_record({"text": "a", "ruby": None}) == PlainSegment("a")

    def test_from_record_empty_ruby_is_rubied(self) -> None:
        assert segment_from_record({"text": "a", "ruby": ""}) == RubiedSegment("a", "")

    def test_from_record_not_object(self) -> None:
        with pytest.raises(ValueError, match="must be an object"):
            segment_from_record(["a"])

    def test_from_record_missing_text(self) -> None:
        with pytest.raises(ValueError, match="missing 'text'"):
            segment_from_record({"ruby": "a"})

    def test_from_record_bad_types(self) -> None:
        with pytest.raises(ValueError, match="'text' must be a string"):
            segment_from_record({"text": 1})
        with pytest.raises(ValueError, match="'ruby' must be a string"):
            segment_from_record({"text": "a", "ruby": 2})

    def test_ruby_string_records(self) -> None:
        records = ruby_string_to_records(_tokyo())
        assert records == [
            {"text": "ここは"},
            {"text": "東", "ruby": "とう"},
            {"text": "京", "ruby": "きょう"},
            {"text": "です"},
        ]
        assert ruby_string_from_records(records) == _tokyo()


class TestJsonl:
    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "rows.jsonl"
        save_jsonl([{"text": "a"}, {"text": "b", "ruby": "c"}], path)
        assert list(iter_jsonl(path)) == [(1, {"text": "a"}), (2, {"text": "b", "ruby": "c"})]

    def test_blank_lines_skipped_but_counted(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.jsonl"
        path.write_bytes(b'{"text": "a"}\n\n  \n{"text": "b"}\n')
        assert list(iter_jsonl(path)) == [(1, {"text": "a"}), (4, {"text": "b"})]

    def test_save_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.jsonl"
        save_jsonl([], path)
        assert path.read_bytes() == b""
        assert list(iter_jsonl(path)) == []

    def test_invalid_json_names_line(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.jsonl"
        path.write_bytes(b'{"text": "a"}\n{oops\n')
        with pytest.raises(ValueError, match="rows.jsonl:2"):
            list(iter_jsonl(path))


class TestRubyStringFiles:
    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "tokyo.jsonl"
        save_ruby_string(_tokyo(), path)
        assert load_ruby_string(path) == _tokyo()

    def test_file_is_utf8_jsonl(self, tmp_path: Path) -> None:
        path = tmp_path / "tokyo.jsonl"
        save_ruby_string(_tokyo(), path)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 4
        assert orjson.loads(lines[1]) == {"text": "東", "ruby": "とう"}

    def test_error_names_line(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.jsonl"
        path.write_bytes(b'{"text": "a"}\n\n{"ruby": "x"}\n')
        with pytest.raises(ValueError, match="bad.jsonl:3: segment record is missing 'text'"):
            load_ruby_string(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.jsonl"
        path.write_bytes(b"{not json\n")
        with pytest.raises(ValueError, match="bad.jsonl:1"):
            load_ruby_string(path)

    def test_marker_in_record_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.jsonl"
        path.write_text('{"text": "a\\ufff9"}\n', encoding="utf-8")
        with pytest.raises(ValueError, match="U\\+FFF9"):
            load_ruby_string(path)


class TestTrailingZeroWidthRuby:
    def test_segments_stop_before_it(self) -> None:
        rs = RubyString.from_segments([PlainSegment("a"), RubiedSegment("", "note")])
        assert list(rs.segments()) == [PlainSegment("a")]

    def test_all_segments_include_it(self) -> None:
        rs = RubyString.from_segments([
            PlainSegment("a"),
            RubiedSegment("", "x"),
            RubiedSegment("", "y"),
        ])
        assert list(ruby_string_segments(rs)) == [
            PlainSegment("a"),
            RubiedSegment("", "x"),
            RubiedSegment("", "y"),
        ]

    def test_only_zero_width_ruby(self) -> None:
        rs = RubyString.from_segments([RubiedSegment("", "note")])
        assert ruby_string_to_records(rs) == [{"text": "", "ruby": "note"}]

    def test_file_round_trip(self, tmp_path: Path) -> None:
        rs = RubyString.from_segments([PlainSegment("a"), RubiedSegment("", "note")])
        path = tmp_path / "trailing.jsonl"
        save_ruby_string(rs, path)
        back = load_ruby_string(path)
        assert back == rs
        assert back.placements == rs.placements
